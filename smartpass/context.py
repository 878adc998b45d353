"""
Name: Request Context (ContextVars)

Responsibilities:
  - Hold request-scoped values (request_id, method, path, user_id) for
    log enrichment without passing them through every call

Collaborators:
  - middleware.py: binds request_id / method / path, clears at the end
  - identity/guard.py: binds user_id once the bearer token is verified
  - logger.py: reads get_context_dict()

Constraints:
  - str values only; "" means unset
"""

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

# R: Log field name -> context var
_LOG_FIELDS = (
    ("request_id", request_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
    ("user_id", user_id_var),
)


def get_context_dict() -> dict:
    """R: Bound values only, keyed by their log field name."""
    return {name: var.get() for name, var in _LOG_FIELDS if var.get()}


def clear_context() -> None:
    for _, var in _LOG_FIELDS:
        var.set("")
