from typing import List, Optional

from pydantic import BaseModel


class SubjectRequest(BaseModel):
    tone: Optional[str] = None


class SubjectSuggestions(BaseModel):
    suggestions: List[str]
