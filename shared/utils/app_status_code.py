class AppStatusCode:
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    INVALID_INPUT = "200"
    REQUIRED_VALIDATION_ERROR = "201"
    DUPLICATE_ADD_ERROR = "202"
    NOT_FOUND = "203"

    OPERATION_ERROR = "300"
    OPERATION_FAILED = "301"
