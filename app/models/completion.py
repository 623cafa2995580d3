"""Wire models for the chat completions API"""
from typing import List
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """Single chat message"""
    role: str = Field(..., description="Message author role, e.g. 'user' or 'assistant'")
    content: str = Field(..., description="Message text")


class ResponseFormat(BaseModel):
    """Requested output format of the completion"""
    type: str = Field("json_object", description="Output format hint sent to the provider")


class CompletionRequest(BaseModel):
    """Outbound chat completion request"""
    model: str = Field(..., description="Model identifier")
    messages: List[ChatMessage] = Field(..., description="Conversation messages", min_length=1)
    response_format: ResponseFormat = Field(default_factory=ResponseFormat, description="Response format hint")


class CompletionChoice(BaseModel):
    """Single completion choice"""
    message: ChatMessage = Field(..., description="Message generated for this choice")


class CompletionResponse(BaseModel):
    """Inbound chat completion response envelope; unknown fields are ignored"""
    choices: List[CompletionChoice] = Field(..., description="Generated choices")
