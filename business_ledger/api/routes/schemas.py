"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class Envelope(BaseModel):
    """Standard response body for every /api endpoint"""

    success: bool
    data: Any = None
    message: str = ""
    timestamp: str


class PaymentRequest(BaseModel):
    """Request body for POST /api/debts/{debt_id}/pay"""

    amount: Any = Field(None, description="Payment amount, number or numeric string")


class ChatMessage(BaseModel):
    """Single conversation turn"""

    role: str
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /api/ai/chat"""

    messages: Optional[List[ChatMessage]] = None
    context: Optional[Dict[str, Any]] = None


class ChatReply(BaseModel):
    """Assistant reply and the source that produced it"""

    reply: str
    mode: str
