"""Constants for BankAccount model field names"""


class BankAccountFields:
    """Field name constants for BankAccount model"""
    ID = "id"
    OWNER_USER_ID = "owner_user_id"
    ACCOUNT_NAME = "account_name"
    ACCOUNT_NUMBER = "account_number"
    BANK_NAME = "bank_name"
    ROUTING_NUMBER = "routing_number"
    SWIFT_CODE = "swift_code"
    IS_DEFAULT = "is_default"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
