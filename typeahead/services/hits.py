from typing import Any, Dict, List
from pydantic import ValidationError
from ..models.schemas import ResultRecord
from .errors import MalformedResponseError


def _unwrap(value: Any) -> Any:
    # Search engines return projected fields as arrays, even for single values
    if isinstance(value, list) and len(value) == 1:
        return value[0]
    return value


def parse_hit(hit: Dict[str, Any]) -> ResultRecord:
    """Build a ResultRecord from one raw hit, ignoring scores and metadata"""
    if not isinstance(hit, dict):
        raise MalformedResponseError(f"Expected a hit object, got {type(hit).__name__}")
    
    fields = hit.get("fields")
    if fields is None:
        fields = hit.get("_source")
    if not isinstance(fields, dict):
        raise MalformedResponseError(f"Hit without fields: {hit!r}")
    
    try:
        return ResultRecord.model_validate({name: _unwrap(value) for name, value in fields.items()})
    except ValidationError as e:
        raise MalformedResponseError(f"Incomplete hit: {e}") from e


def parse_hits(hits: Any) -> List[ResultRecord]:
    """Parse an ordered list of raw hits; one bad hit fails the whole response"""
    if not isinstance(hits, list):
        raise MalformedResponseError(f"Expected a list of hits, got {type(hits).__name__}")
    return [parse_hit(hit) for hit in hits]
