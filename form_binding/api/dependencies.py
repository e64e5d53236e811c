"""FastAPI dependencies binding request query and form fields into records."""

from typing import Any, Callable

from fastapi import Request

from form_binding.binding import FormBinder, FormBinderPort, binding_new_record, binding_source_from_pairs


def api_bind_query(record_type: type, binder: FormBinderPort | None = None) -> Callable[[Request], Any]:
    """Create a dependency binding query parameters into a new record.

    Args:
        record_type: Dataclass type to instantiate and populate.
        binder: Optional binder; a default `FormBinder` is used when None.

    Returns:
        Callable[[Request], Any]: FastAPI dependency returning the bound record.

    Raises:
        ValueError: Raised when record_type is invalid.
    """

    if record_type is None:
        raise ValueError("record_type must not be None")
    resolved_binder = binder or FormBinder()

    def api_query_record_dependency(request: Request) -> Any:
        """Bind the request query string into one record.

        Raises:
            BindingError: Raised when one query value cannot be bound.
        """

        record = binding_new_record(record_type)
        resolved_binder.binding_bind(record, binding_source_from_pairs(request.query_params.multi_items()))
        return record

    return api_query_record_dependency


def api_bind_form(record_type: type, binder: FormBinderPort | None = None) -> Callable[[Request], Any]:
    """Create a dependency binding url-encoded or multipart form fields into a new record.

    Uploaded files are not part of the source mapping; only text fields bind.

    Args:
        record_type: Dataclass type to instantiate and populate.
        binder: Optional binder; a default `FormBinder` is used when None.

    Returns:
        Callable[[Request], Any]: Async FastAPI dependency returning the bound record.

    Raises:
        ValueError: Raised when record_type is invalid.
    """

    if record_type is None:
        raise ValueError("record_type must not be None")
    resolved_binder = binder or FormBinder()

    async def api_form_record_dependency(request: Request) -> Any:
        """Bind the request form body into one record.

        Raises:
            BindingError: Raised when one form value cannot be bound.
        """

        form_data = await request.form()
        text_pairs = [(key, value) for key, value in form_data.multi_items() if isinstance(value, str)]
        record = binding_new_record(record_type)
        resolved_binder.binding_bind(record, binding_source_from_pairs(text_pairs))
        return record

    return api_form_record_dependency
