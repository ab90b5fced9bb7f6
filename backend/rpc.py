"""Names of the stored procedures exposed by the remote database."""

from enum import Enum


class UserRpc(str, Enum):
    GET_PROFILE = "user_get_profile"
    HANDLE_NEW_USER = "handle_new_user"
    CHECK_IF_EMAIL_EXIST = "check_if_email_exist"
    GET_CREDIT_BALANCE = "user_get_credit_balance"
    GET_TRANSACTION_HISTORY = "user_get_transaction_history"


class RatingRpc(str, Enum):
    CREATE_FOR_REQUESTOR = "rating_create_for_requestor"
    CREATE_FOR_PROVIDER = "rating_create_for_provider"


class ServiceRequestRpc(str, Enum):
    CREATE = "service_request_create"
    DELETE = "service_request_delete"
    APPLY_PROVIDER = "service_request_apply_provider"
    SELECT_PROVIDER = "service_request_select_provider"
    START_SERVICE = "service_request_start_service"
    COMPLETE_SERVICE = "service_request_complete_service"
    GET_SUMMARY_FOR_USER = "service_request_get_summary_for_user"
