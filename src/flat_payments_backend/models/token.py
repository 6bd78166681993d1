'''

'''
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class TokenPayload(BaseModel):
    sub: str # 'sub' is standard JWT claim for subject (the opaque user id)
    exp: Optional[datetime] = None
