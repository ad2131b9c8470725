from ._codec import (
    FormData,
    body_to_params,
    check_for_form_data,
    convert_to_form_data,
    format_param,
    get_url_end,
    is_content_type_form_data,
    is_object_not_form_data,
    is_primitive,
    remove_slashes,
)
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "FormData",
    "body_to_params",
    "check_for_form_data",
    "convert_to_form_data",
    "format_param",
    "get_url_end",
    "is_content_type_form_data",
    "is_object_not_form_data",
    "is_primitive",
    "remove_slashes",
    "get_httpx_client_kwargs",
]
