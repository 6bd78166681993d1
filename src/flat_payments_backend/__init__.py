'''
Flat payments backend: flats, recurring payment types and monthly payments.
'''
