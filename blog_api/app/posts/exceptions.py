"""Post domain exceptions."""

from blog_api.common.exceptions import ClientInputError


class MissingFields(ClientInputError):
    default_detail = 'Missing required fields.'
    error_type = 'missing_fields'
