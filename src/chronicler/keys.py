from .errors import MalformedKey

SEPARATOR = ":"


def parse_key(key: str, group: str | None = None) -> tuple[str, str]:
    """
    Split a key into (group, id).

    "<group>:<id>" wins over the `group` argument; a bare id falls back to
    `group`, or the unnamed group "".
    """
    if not isinstance(key, str):
        raise MalformedKey(f"Event id must be a string, got {type(key).__name__}")

    if SEPARATOR in key:
        group, _, event_id = key.partition(SEPARATOR)
    else:
        event_id = key

    if not event_id:
        raise MalformedKey(f"Event id cannot be empty (key {key!r})")

    return group or "", event_id


def format_key(group: str, event_id: str) -> str:
    return f"{group}{SEPARATOR}{event_id}" if group else event_id
