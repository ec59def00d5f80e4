from typing import Dict, Any, List, Optional
from pydantic import BaseModel


def _to_payload(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, list):
        return [_to_payload(item) for item in value]
    return value


def build_params_from_locals(locals_dict: Dict, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Build a dictionary of API parameters from the locals dictionary.

    None values are treated as "not provided" and dropped; pydantic models
    are dumped to plain dicts. Key order follows the function signature.
    """
    exclude = exclude or []
    params = {}
    for k, v in locals_dict.items():
        if k not in exclude and v is not None:
            params[k] = _to_payload(v)
    return params
