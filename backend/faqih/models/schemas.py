from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

Verdict = Literal["PERMITTED", "FORBIDDEN", "CONDITIONAL"]
Role = Literal["user", "model"]


# --- Fatwas ---

class Fatwa(BaseModel):
    id: str = Field(..., min_length=1)
    title: str
    category: str = Field(
        default="GENERAL",
        pattern="^(ICU|SURGERY|OBGYN|INTERNAL|GENERAL|UNIT_8_WORSHIP)$",
    )
    question: str = ""
    medical_context: str = ""
    ruling: str = ""
    verdict: Verdict
    source: str = ""
    tags: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class FatwaListResponse(BaseModel):
    fatwas: list[Fatwa]


class SearchHit(BaseModel):
    fatwa: Fatwa
    score: float


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]


# --- Chat ---

class ChatMessage(BaseModel):
    id: str
    role: Role
    text: str
    related_fatwa_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}


class ChatSessionResponse(BaseModel):
    id: str
    busy: bool
    messages: list[ChatMessage]


class ChatSendRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)


class ChatSendResponse(BaseModel):
    session_id: str
    messages: list[ChatMessage]
    fatwas: list[Fatwa]


# --- Semantic fallback ---

class KnowledgeEntry(BaseModel):
    id: str
    keywords: str
    question: str
    title: str


# --- License card ---

class PatientLicenseData(BaseModel):
    doctor_name: str = Field(..., min_length=1, max_length=200)
    patient_name: str = Field(..., min_length=1, max_length=200)
    date: str = Field(..., min_length=1, max_length=50)
    diagnosis: str = Field(..., min_length=1, max_length=500)
    ruling_summary: str = Field(..., min_length=1, max_length=2000)


# --- Health ---

class HealthResponse(BaseModel):
    status: str
    version: str
    fatwa_count: int
    speech_available: bool
    semantic_fallback_enabled: bool
