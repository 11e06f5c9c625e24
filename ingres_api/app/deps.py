from typing import Dict, Optional

import httpx
from fastapi import Request
from ollama import Client as OllamaClient

from ingres_api.app.config import Settings
from ingres_api.app.repositories.knowledge_repo import KnowledgeRepo
from ingres_api.app.services.chat_service import ChatService
from ingres_api.app.utils.logger import setup_logger


def build_ollama(settings: Settings) -> OllamaClient:
    headers: Optional[Dict[str, str]] = None
    if settings.OLLAMA_API_KEY:
        headers = {"Authorization": f"Bearer {settings.OLLAMA_API_KEY}"}
    return OllamaClient(host=settings.OLLAMA_URL, headers=headers, timeout=settings.LLM_TIMEOUT_SECONDS)


def build_knowledge_repo(settings: Settings) -> KnowledgeRepo:
    return KnowledgeRepo(
        http=httpx.Client(timeout=settings.LOOKUP_TIMEOUT_SECONDS),
        base_url=settings.SUPABASE_URL,
        api_key=settings.SUPABASE_SERVICE_ROLE_KEY,
        table=settings.KNOWLEDGE_TABLE,
    )


def build_chat_service(settings: Settings) -> ChatService:
    return ChatService(
        knowledge=build_knowledge_repo(settings),
        llm=build_ollama(settings),
        chat_model=settings.CHAT_MODEL,
        keep_alive=settings.OLLAMA_KEEP_ALIVE,
        logger=setup_logger(log_dir=settings.LOG_DIR, level=settings.LOG_LEVEL),
    )


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service
