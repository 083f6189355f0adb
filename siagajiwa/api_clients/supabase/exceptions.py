from siagajiwa.api_clients.base.exceptions import BaseApiClientError


class SupabaseClientError(BaseApiClientError):
    pass


class AuthConfirmationRequiredError(SupabaseClientError):
    """Sign-up was accepted, but the account has to be confirmed before a session is issued."""


class AuthRejectedError(SupabaseClientError):
    pass


class AuthValidationError(SupabaseClientError):
    """Credentials were rejected locally, before any request was made."""


class SupabaseJSONParsingError(SupabaseClientError):
    pass


class SupabaseRequestError(SupabaseClientError):
    pass
