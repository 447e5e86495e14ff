class DataTypes:
    EDITORIAL_REVIEW = "EditorialReview"
    PHYSICAL_PRODUCT = "PhysicalProduct"


class ProductTypes:
    PHYSICAL = "Physical"


EXPORT_FILE_NAME_PREFIXES = {
    DataTypes.EDITORIAL_REVIEW: "Descriptions",
    DataTypes.PHYSICAL_PRODUCT: "Physical_products",
}

KBYTE = 1024
MBYTE = 1024 * KBYTE


class ValidationErrors:
    FILE_NOT_EXISTED = "file-not-existed"
    NO_DATA = "no-data"
    EXCEEDING_FILE_MAX_SIZE = "exceeding-file-max-size"
    WRONG_DELIMITER = "wrong-delimiter"
    EXCEEDING_LINE_LIMITS = "exceeding-line-limits"
    MISSING_REQUIRED_COLUMNS = "missing-required-columns"
    MISSING_REQUIRED_VALUES = "missing-required-values"
    EXCEEDING_MAX_LENGTH = "exceeding-max-length"
    INVALID_VALUE = "invalid-value"
    NOT_UNIQUE_VALUE = "not-unique-value"
    PRODUCT_NOT_EXISTS = "product-not-exists"
    REVIEW_NOT_EXISTS = "review-not-exists"
    MAIN_PRODUCT_IS_NOT_EXISTS = "main-product-is-not-exists"
    CYCLE_SELF_REFERENCE = "cycle-self-reference"
    MAIN_PRODUCT_IS_VARIATION = "main-product-is-variation"


VALIDATION_MESSAGES = {
    ValidationErrors.MISSING_REQUIRED_VALUES: "The required value in column '{0}' is missing.",
    ValidationErrors.EXCEEDING_MAX_LENGTH: "Value in column '{0}' may have maximum {1} characters.",
    ValidationErrors.INVALID_VALUE: "This row has invalid value in the column '{0}'.",
    ValidationErrors.NOT_UNIQUE_VALUE: "Value in column '{0}' should be unique.",
    ValidationErrors.PRODUCT_NOT_EXISTS: "The product with SKU '{0}' does not exist.",
    ValidationErrors.REVIEW_NOT_EXISTS: "The description with id '{0}' does not exist.",
    ValidationErrors.MAIN_PRODUCT_IS_NOT_EXISTS: "The main product does not exists.",
    ValidationErrors.CYCLE_SELF_REFERENCE: "The main product id is the same as product. It means self cycle reference.",
    ValidationErrors.MAIN_PRODUCT_IS_VARIATION: "The main product is variation. You should not import variations for variations.",
}

# Row-level decode messages
BAD_DATA_MESSAGE = "This row has invalid data. The data after field with not escaped quote was lost."
MISSED_COLUMNS_MESSAGE = "This row has unclosed quote or missed columns: {0}."
INVALID_ENCODING_MESSAGE = "This row is not valid {0} text. The unreadable bytes were replaced."
REQUIRED_VALUES_MESSAGE = "The required values in columns: {0} - are missing."

IMPORT_DESCRIPTION = "{0} out of {1} have been imported."
EXPORT_DESCRIPTION = "{0} out of {1} have been exported."
