"""Common type definitions for the screening agent."""
from typing import Dict, Mapping

# Type aliases for clarity
AnswerMapping = Mapping[str, str]  # {"symptoms": "Yes", "travel": "No", ...}
SessionPayload = Dict[str, object]  # JSON-serialisable SessionState.to_dict()
