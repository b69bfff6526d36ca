"""
Form parameter codec for gateway requests.

Nested request parameters travel as flat form fields whose keys are
dotted paths. Array elements use 1-based indices:

    {"a": {"b": [{"c": 1}]}}  <->  {"a.b.1.c": 1}
"""

from typing import Any, Dict, List, Union


def build_form_params(params: Any) -> Dict[str, Any]:
    """
    Flatten a nested value into dotted-path form parameters.

    None values are dropped, so no key is emitted for them. Empty
    containers contribute nothing.

    Args:
        params: Nested dict/list structure of scalars

    Returns:
        Dictionary mapping dotted paths to scalar values
    """
    result: Dict[str, Any] = {}

    def build(path: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, dict):
            for key, item in value.items():
                build(f"{path}.{key}", item)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                build(f"{path}.{index + 1}", item)
        else:
            result[path[1:]] = value

    build("", params)
    return result


def _is_index(part: str) -> bool:
    return part.isascii() and part.isdigit() and int(part) > 0


def _new_container(next_part: str) -> Union[Dict[str, Any], List[Any]]:
    # Node type is fixed by the first key that reaches it
    return [] if _is_index(next_part) else {}


def _get_child(node: Union[Dict[str, Any], List[Any]], part: str) -> Any:
    if isinstance(node, list):
        index = int(part) - 1
        while index >= len(node):
            node.append(None)
        return node[index]
    return node.get(part)


def _set_child(node: Union[Dict[str, Any], List[Any]], part: str, value: Any) -> None:
    if isinstance(node, list):
        node[int(part) - 1] = value
    else:
        node[part] = value


def deserialize(form_params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rebuild the nested structure encoded by build_form_params.

    Sparse indices are kept in place: missing array slots are filled
    with None rather than compacted.

    Args:
        form_params: Dotted-path form parameters

    Returns:
        Nested dictionary

    Raises:
        ValueError: If keys disagree about the shape of a node
    """
    result: Dict[str, Any] = {}

    for key, value in form_params.items():
        parts = key.split(".")
        node: Union[Dict[str, Any], List[Any]] = result

        for i in range(1, len(parts)):
            parent_part = parts[i - 1]
            if isinstance(node, list) and not _is_index(parent_part):
                raise ValueError(f"Key {key!r}: segment {parent_part!r} is not an array index")

            child = _get_child(node, parent_part)
            if child is None:
                child = _new_container(parts[i])
                _set_child(node, parent_part, child)
            elif not isinstance(child, (dict, list)):
                raise ValueError(f"Key {key!r} conflicts with scalar at {'.'.join(parts[:i])!r}")
            node = child

        last_part = parts[-1]
        if isinstance(node, list):
            if not _is_index(last_part):
                raise ValueError(f"Key {key!r}: segment {last_part!r} is not an array index")
            # Pad the slot before assigning
            _get_child(node, last_part)
        _set_child(node, last_part, value)

    return result
