import logging
import time
from typing import Dict, List, Optional, Sequence

from ingres_api.app.exceptions import KnowledgeLookupError, UpstreamFailure, error_message
from ingres_api.app.repositories.knowledge_repo import KnowledgeRepo
from ingres_api.app.schemas.chat import ChatRequest, ChatResponse, KnowledgeRow
from ingres_api.app.utils.logger import setup_logger

SYSTEM_PROMPT = (
    "You are the INGRES groundwater assistant. Be concise, accurate, and helpful.\n"
    "If asked for trends or a table, explain briefly in plain English."
)
CONTEXT_HEADER = "Relevant data from Supabase (top matches):"
FALLBACK_TEXT = "Sorry, I couldn't generate a response."
TEMPERATURE = 0.2


def format_context(rows: Sequence[KnowledgeRow]) -> str:
    return "\n".join(row.render() for row in rows)


def build_user_prompt(text: str, context: str, lang: Optional[str]) -> str:
    prompt = f"{CONTEXT_HEADER}\n{context}\n\n" if context else ""
    if lang and lang != "en":
        return prompt + f"Language: {lang}\nQuery: {text}"
    return prompt + text


def build_messages(text: str, context: str, lang: Optional[str]) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(text, context, lang)},
    ]


def extract_reply(out) -> str:
    """Trimmed content of the model reply, or the fallback text."""
    message = (out.get("message") if out is not None else None) or {}
    content = message.get("content") or ""
    content = content.strip() if isinstance(content, str) else ""
    return content or FALLBACK_TEXT


class ChatService:
    def __init__(self, knowledge: KnowledgeRepo, llm, chat_model: str, keep_alive: Optional[str] = None,
                 logger: Optional[logging.Logger] = None):
        self.knowledge = knowledge
        self.llm = llm
        self.chat_model = chat_model
        self.keep_alive = keep_alive
        self.logger = logger or setup_logger()

    def lookup_context(self, text: str) -> str:
        try:
            rows = self.knowledge.search(text)
        except KnowledgeLookupError as e:
            self.logger.warning("Knowledge lookup failed, answering without context: %s", e)
            return ""
        return format_context(rows)

    def answer(self, req: ChatRequest) -> ChatResponse:
        context = self.lookup_context(req.text)
        messages = build_messages(req.text, context, req.lang)

        start = time.time()
        try:
            out = self.llm.chat(
                model=self.chat_model,
                messages=messages,
                options={"temperature": TEMPERATURE},
                keep_alive=self.keep_alive,
            )
        except Exception as e:
            self.logger.exception("LLM call failed")
            raise UpstreamFailure(error_message(e)) from e
        self.logger.info("LLM response time: %.2f seconds", time.time() - start)

        return ChatResponse(type="text", text=extract_reply(out))

    def close(self):
        self.knowledge.close()
        # ollama.Client keeps its httpx client on _client
        llm_http = getattr(self.llm, "_client", None)
        if llm_http is not None:
            llm_http.close()
