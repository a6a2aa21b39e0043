"""Key namespacing shared by the sorted-set store adapters."""


def build_key(prefix: str, name: str, group: str) -> str:
    """Join prefix, group and name into a namespaced key.

    Args:
        prefix: Store-wide prefix (e.g. a site or cache salt). May be empty.
        name: Name of the collection (e.g. "metrics").
        group: Group the collection belongs to (e.g. "cachestats").

    Returns:
        "<prefix>:<group>:<name>", or "<group>:<name>" when prefix is empty.
    """
    parts = [part for part in (prefix, group, name) if part]
    return ":".join(parts)
