"""
Field extraction helpers for filess.io database responses.

Pure functions, no I/O. Each accepts either a JsonValue or the equivalent
decoded Python structure and tolerates missing or mistyped members.
"""

from typing import Any, Dict, Tuple

from ...utils.json_value import JsonKind, JsonValue

HOSTNAME_KEY = "database_hostname"
SERVICE_PORT_KEY = "database_service_port"
CONNECTION_PARAM_KEYS = (HOSTNAME_KEY, SERVICE_PORT_KEY)

ROOT_ROLE = "root"


def _wrap(value: Any) -> JsonValue:
    return JsonValue.wrap(value)


def id_to_string(value: Any) -> str:
    """
    Render an API id as a string.

    Numbers are rendered without decimals (42.0 -> "42"), strings pass
    through unchanged, null becomes "" and anything else is rendered as
    compact JSON.
    """
    try:
        wrapped = _wrap(value)
    except TypeError:
        return str(value)

    text = wrapped.as_str()
    if text is not None:
        return text
    number = wrapped.as_number()
    if number is not None:
        if isinstance(number, int):
            return str(number)
        return f"{number:.0f}"
    if wrapped.is_null:
        return ""
    return wrapped.dumps()


def map_database_params(raw: Any) -> Dict[str, str]:
    """
    Extract connection parameters from a list of ``{key, value}`` records.

    Returns:
        Dictionary with ``database_hostname`` and ``database_service_port``,
        each "" unless a matching record was found
    """
    result = {key: "" for key in CONNECTION_PARAM_KEYS}

    params = _wrap(raw).as_array()
    if params is None:
        return result

    for param in params:
        key = param.get_str("key")
        if key not in result:
            continue

        value = param.get("value")
        if value is None:
            result[key] = ""
        elif value.kind is JsonKind.NUMBER:
            result[key] = id_to_string(value)
        else:
            result[key] = value.as_str() or ""

    return result


def select_database_user(raw: Any) -> Tuple[str, str]:
    """
    Pick the credentials to expose from a list of database users.

    A user whose role or username is "root" wins. Otherwise the first user
    with both username and password set is returned. Users missing either
    are ignored.

    Returns:
        (username, password), or ("", "") when no usable user exists
    """
    users = _wrap(raw).as_array()
    if not users:
        return "", ""

    fallback = ("", "")
    for user in users:
        if user.as_object() is None:
            continue

        username = user.get_str("username")
        password = user.get_str("password")
        role = user.get_str("role")

        if not username or not password:
            continue

        if role == ROOT_ROLE or username == ROOT_ROLE:
            return username, password

        if not fallback[0]:
            fallback = (username, password)

    return fallback


def extract_stripe_checkout_url(data: Any) -> str:
    """Return ``stripeCheckoutSession.url`` when it is a non-empty string, else ""."""
    url = _wrap(data).lookup("stripeCheckoutSession", "url")
    if url is None:
        return ""
    return url.as_str() or ""


def credentials_are_ready(data: Any) -> bool:
    """True when hostname, port, username and password can all be extracted."""
    wrapped = _wrap(data)

    params = map_database_params(wrapped.get("databaseParams"))
    if not params[HOSTNAME_KEY] or not params[SERVICE_PORT_KEY]:
        return False

    username, password = select_database_user(wrapped.get("databaseUsers"))
    return bool(username and password)
