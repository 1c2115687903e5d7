import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

ALLOWED_PROTOCOLS = (
    "http", "https", "ftp", "ftps", "mailto", "news", "irc", "gopher", "nntp",
    "feed", "telnet", "mms", "rtsp", "sms", "svn", "tel", "fax", "xmpp", "webcal", "urn",
)

_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9]{2}")
_NOT_CLASS_CHAR = re.compile(r"[^A-Za-z0-9_-]")
_NOT_URL_CHAR = re.compile(r"[^a-z0-9\-~+_.?#=!&;,/:%@$|*'()\[\]\x80-\xff]", re.IGNORECASE)
_LIST_SEPARATOR = re.compile(r"[\s,]+")


def sanitize_html_class(value: Any) -> str:
    """Reduce a value to a token safe for an HTML class attribute."""
    sanitized = _PERCENT_OCTET.sub("", str(value))
    sanitized = _NOT_CLASS_CHAR.sub("", sanitized)
    return sanitized


def esc_url_raw(url: Any) -> str:
    """Clean a URL for storage; URLs with a disallowed protocol become empty."""
    if url is None:
        return ""
    url = str(url).strip().replace(" ", "%20")
    if not url:
        return ""
    url = _NOT_URL_CHAR.sub("", url)
    if not url:
        return ""

    # Relative references are kept as they are
    if url[0] in "/#?":
        return url

    scheme = urlsplit(url).scheme.lower() if ":" in url else ""
    if not scheme:
        return "http://" + url
    if scheme not in ALLOWED_PROTOCOLS:
        return ""
    return url


def parse_list(value: Any) -> List[Any]:
    """Accept a list, or a comma/space separated string."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [part for part in _LIST_SEPARATOR.split(value) if part]
    return [value]


def absint(value: Any) -> int:
    """Non-negative integer conversion; anything unparseable is 0."""
    try:
        return abs(int(float(value)))
    except (TypeError, ValueError):
        return 0


def sanitize_boolean(value: Any) -> bool:
    if isinstance(value, str) and value.strip().lower() in ("false", "0", ""):
        return False
    return bool(value)


def sanitize_value_from_schema(value: Any, schema: Dict[str, Any]) -> Any:
    """Coerce a request value to the type its schema declares."""
    value_type = schema.get("type")
    if value is None or not value_type:
        return value

    if value_type == "array":
        items = schema.get("items")
        values = parse_list(value)
        if not items:
            return values
        return [sanitize_value_from_schema(item, items) for item in values]

    if value_type == "object":
        if not isinstance(value, dict):
            return {}
        properties = schema.get("properties", {})
        return {
            key: sanitize_value_from_schema(item, properties[key]) if key in properties else item
            for key, item in value.items()
        }

    if value_type == "integer":
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0

    if value_type == "number":
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    if value_type == "boolean":
        return sanitize_boolean(value)

    if value_type == "string":
        if schema.get("format") == "uri":
            return esc_url_raw(value)
        return str(value)

    return value


def validate_value_from_schema(value: Any, schema: Dict[str, Any], param: str) -> Optional[str]:
    """Return a message describing why the value does not fit its schema, or None."""
    value_type = schema.get("type")

    if value_type == "array":
        if not isinstance(value, (list, tuple, str)):
            return f"{param} is not of type array."
        items = schema.get("items")
        if items:
            for index, item in enumerate(parse_list(value)):
                error = validate_value_from_schema(item, items, f"{param}[{index}]")
                if error:
                    return error
        return None

    if value_type == "object" and not isinstance(value, dict):
        return f"{param} is not of type object."

    if value_type == "integer":
        if isinstance(value, bool):
            return f"{param} is not of type integer."
        try:
            if float(value) != int(float(value)):
                return f"{param} is not of type integer."
        except (TypeError, ValueError):
            return f"{param} is not of type integer."
        if "minimum" in schema and int(float(value)) < schema["minimum"]:
            return f"{param} must be greater than or equal to {schema['minimum']}"
        if "maximum" in schema and int(float(value)) > schema["maximum"]:
            return f"{param} must be less than or equal to {schema['maximum']}"

    if value_type == "boolean" and not isinstance(value, bool):
        if not (isinstance(value, str) and value.lower() in ("true", "false", "0", "1", "")) \
                and value not in (0, 1):
            return f"{param} is not of type boolean."

    if value_type == "string" and not isinstance(value, str):
        return f"{param} is not of type string."

    enum = schema.get("enum")
    if enum is not None and value not in enum:
        return f"{param} is not one of {', '.join(str(option) for option in enum)}."

    return None
