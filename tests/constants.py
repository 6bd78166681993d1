from uuid import UUID

TEST_OWNER_ID = UUID('e850ce9b-d934-47b9-a029-b510f39d5bbc')
TEST_OTHER_USER_ID = UUID('dcef54de-bc89-4388-a7a8-dba5d8327447')

TEST_FLAT_ID = UUID('026ce9a5-eded-480f-b98c-a62b459807aa')
TEST_OTHER_FLAT_ID = UUID('80194ca6-fb6a-422a-bdb8-63e64e23e79e')

# Well-formed but never stored.
TEST_MISSING_ID = UUID('d5dcf3b2-d166-4fd0-890d-3553bf2eca57')

MALFORMED_IDS = [
    "not-a-uuid",
    "",
    "026ce9a5-eded-480f-b98c-a62b459807a",     # too short
    "026ce9a5eded-480f-b98c-a62b459807aa0",    # wrong grouping
    "026ce9a5-eded-480f-b98c-a62b459807ag",    # non-hex
    "{026ce9a5-eded-480f-b98c-a62b459807aa}",  # braces
]
