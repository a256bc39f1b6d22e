"""Constants for KycSubmission model field names"""


class KycFields:
    """Field name constants for KycSubmission model"""
    ID = "id"
    OWNER_USER_ID = "owner_user_id"
    ID_TYPE = "id_type"
    ID_NUMBER = "id_number"
    ID_IMAGE_REF = "id_image_ref"
    SELFIE_IMAGE_REF = "selfie_image_ref"
    ADDRESS_PROOF_TYPE = "address_proof_type"
    ADDRESS_PROOF_IMAGE_REF = "address_proof_image_ref"
    STATUS = "status"
    REJECTION_REASON = "rejection_reason"
    SUBMITTED_AT = "submitted_at"
    UPDATED_AT = "updated_at"
    VERIFIED_BY = "verified_by"
    VERIFIED_AT = "verified_at"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
