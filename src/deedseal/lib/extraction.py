"""
Boundary normalization for document-AI extraction output.

The document model is asked for a JSON object keyed by the deed field wire
names, but its replies are not always clean: code fences, prose around the
object, numbers instead of strings, or no JSON at all. This module turns
such a reply into a strict `DeedFields` before it reaches the encoder.
"""

import json
import re
from typing import Any, Dict, Mapping, Optional

from deedseal.lib.errors import MalformedRecord
from deedseal.lib.log import get_logger, log
from deedseal.lib.record import DeedFields

logger = get_logger("extraction")

# Fields the document model is asked to extract; Owner comes from the caller.
EXTRACTED_FIELDS = (
    "NoHakmilik",
    "NoBangunan",
    "NoTingkat",
    "NoPetak",
    "Negeri",
    "Daerah",
    "Bandar",
)

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"```$")

# (field, patterns tried in order); a pattern without a group yields the whole match
_LABEL_PATTERNS = (
    ("NoHakmilik", (r"No\.?\s*Hakmilik\s*[:\-]\s*([^\n]+)", r"Geran\s+\d+")),
    ("NoBangunan", (r"No\.?\s*Bangunan\s*[:\-]\s*([^\n]+)",)),
    ("NoTingkat", (r"No\.?\s*Tingkat\s*[:\-]\s*([^\n]+)",)),
    ("NoPetak", (r"No\.?\s*Petak\s*[:\-]\s*([^\n]+)",)),
    ("Negeri", (r"Negeri\s*[:\-]\s*([^\n]+)",)),
    ("Daerah", (r"Daerah\s*[:\-]\s*([^\n]+)",)),
    ("Bandar", (r"Bandar(?:/Pekan/Mukim)?\s*[:\-]\s*([^\n]+)",)),
)


def parse_json_loose(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of a model reply.

    Strips Markdown code fences and tries a direct parse; failing that,
    parses the first balanced {...} block. Returns None when nothing parses
    to a JSON object.
    """
    if not text:
        return None

    s = _FENCE_END.sub("", _FENCE_START.sub("", text.strip())).strip()
    try:
        parsed = json.loads(s)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    start = s.find("{")
    if start < 0:
        return None

    depth = 0
    for i in range(start, len(s)):
        ch = s[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    parsed = json.loads(s[start : i + 1])
                except json.JSONDecodeError:
                    return None
                return parsed if isinstance(parsed, dict) else None
    return None


def fallback_extract(text: str) -> Dict[str, str]:
    """Extract deed fields from free text by their printed labels."""
    result = {}
    for field, patterns in _LABEL_PATTERNS:
        value = ""
        for pattern in patterns:
            match = re.search(pattern, text, re.IGNORECASE)
            if match:
                # A blank capture counts as no value; the next pattern is tried
                # rather than returning the bare label text.
                value = (match.group(1) if match.groups() else match.group(0)).strip()
                if value:
                    break
        result[field] = value
    return result


def normalize_bandar(value: str) -> str:
    """
    Reduce a BANDAR/PEKAN/MUKIM cell to the town value.

    When the value holds several parts separated by '/' or ',', the part
    mentioning "bandar" wins; otherwise the value is kept as is.
    """
    value = value.strip()
    if value and re.search(r"[/,]", value):
        parts = [p.strip() for p in re.split(r"[/,]", value)]
        for part in parts:
            if re.search(r"bandar", part, re.IGNORECASE):
                return part
    return value


def _coerce(field: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        raise MalformedRecord(f"Field {field} must be a string, got bool")
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    raise MalformedRecord(
        f"Field {field} must be a string, got {type(value).__name__}"
    )


def fields_from_extraction(data: Mapping[str, Any], owner: str) -> DeedFields:
    """
    Build a strict DeedFields from a loosely typed extraction result.

    Missing or null fields become "", numbers become their string form, and
    anything else is rejected.

    Raises:
        MalformedRecord: if a field holds a list, object or boolean.
    """
    values = {field: _coerce(field, data.get(field)) for field in EXTRACTED_FIELDS}
    values["Bandar"] = normalize_bandar(values["Bandar"])
    values["Owner"] = _coerce("Owner", owner)
    return DeedFields.model_validate(values)


def fields_from_text(text: str, owner: str) -> DeedFields:
    """Parse a document model reply, falling back to label extraction."""
    parsed = parse_json_loose(text)
    if parsed is None:
        log(logger, "info", "Model reply is not JSON; using label extraction", chars=len(text or ""))
        parsed = fallback_extract(text or "")
    return fields_from_extraction(parsed, owner)
