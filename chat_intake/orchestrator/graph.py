from __future__ import annotations

import logging
import secrets
from dataclasses import asdict
from typing import Callable, Dict, List, Optional, Sequence

from langgraph.graph import END, StateGraph

from chat_intake.adapters.conversation_store import ConversationStore
from chat_intake.errors import ValidationError
from chat_intake.orchestrator.intents import CANNED_INTENTS, Intent, IntentResult
from chat_intake.orchestrator.state import ReplyOutcome, ReplyState
from chat_intake.schemas.conversation import ConversationEntry
from chat_intake.services.canned import CannedResponseBank
from chat_intake.services.dedup import DuplicateSuppressor
from chat_intake.services.extraction import extract_reply_text
from chat_intake.services.generation import GenerativeClient, build_history
from chat_intake.services.intent_rules import detect_region
from chat_intake.services.sanitizer import ReplySanitizer

logger = logging.getLogger(__name__)

FAILURE_REPLY = "Sorry, I'm having trouble connecting to the service."
CLARIFY_REPLY = "Could you tell me a bit more about your study-abroad question?"


def new_session_id() -> str:
    return secrets.token_hex(8)


class ReplyOrchestrator:
    """LangGraph state machine deciding how each chat turn is answered.

    classify -> greeting | canned | clarify | generate -> sanitize -> dedup,
    with every branch ending in persist. Canned intents never reach the
    generative backend.
    """

    def __init__(
        self,
        conversation_store: ConversationStore,
        intent_classifier: Callable[[str], IntentResult],
        generative_client: Callable[[], GenerativeClient],
        system_instruction: str,
        brand_name: str = "GlobalTree",
        canned_bank: Optional[CannedResponseBank] = None,
        sanitizer: Optional[ReplySanitizer] = None,
        suppressor: Optional[DuplicateSuppressor] = None,
    ) -> None:
        self._store = conversation_store
        self._intent_classifier = intent_classifier
        self._generative_client = generative_client
        self._system_instruction = system_instruction
        self._brand_name = brand_name
        self._canned = canned_bank or CannedResponseBank()
        self._sanitizer = sanitizer or ReplySanitizer()
        self._suppressor = suppressor or DuplicateSuppressor(conversation_store)
        self._graph = self._build_graph().compile()

    @property
    def greeting(self) -> str:
        return (
            f"Namaste! I'm {self._brand_name}'s assistant. "
            "How can I help with your study-abroad question?"
        )

    @property
    def greeting_ack(self) -> str:
        return "I've already greeted you - how can I help with your study-abroad question?"

    def _build_graph(self) -> StateGraph:
        graph = StateGraph(ReplyState)

        graph.add_node("classify", self._classify_node)
        graph.add_node("greeting", self._greeting_node)
        graph.add_node("canned", self._canned_node)
        graph.add_node("clarify", self._clarify_node)
        graph.add_node("generate", self._generate_node)
        graph.add_node("sanitize", self._sanitize_node)
        graph.add_node("dedup", self._dedup_node)
        graph.add_node("persist", self._persist_node)

        graph.set_entry_point("classify")
        graph.add_conditional_edges(
            "classify",
            self._intent_router,
            {
                "greeting": "greeting",
                "canned": "canned",
                "clarify": "clarify",
                "generate": "generate",
            },
        )
        graph.add_edge("greeting", "persist")
        graph.add_edge("canned", "persist")
        graph.add_edge("clarify", "persist")
        graph.add_edge("generate", "sanitize")
        graph.add_edge("sanitize", "dedup")
        graph.add_edge("dedup", "persist")
        graph.add_edge("persist", END)
        return graph

    def _classify_node(self, state: ReplyState) -> Dict:
        result = self._intent_classifier(state.utterance)
        logger.debug("Session %s classified as %s", state.session_id, result.intent.value)
        return {"intent": result.intent, "score": result.score}

    def _intent_router(self, state: ReplyState) -> str:
        intent = Intent(state.intent)
        if intent is Intent.GREETING:
            return "greeting"
        if intent in CANNED_INTENTS:
            return "canned"
        if intent is Intent.UNKNOWN:
            return "clarify"
        return "generate"

    def _greeting_node(self, state: ReplyState) -> Dict:
        previous = self._last_assistant_reply(state.session_id)
        if previous and self._brand_name.lower() in previous.lower():
            return {
                "intent": Intent.GREETING_REPEAT,
                "reply": self.greeting_ack,
                "record_reply": False,
            }
        return {"reply": self.greeting}

    def _canned_node(self, state: ReplyState) -> Dict:
        intent = Intent(state.intent)
        region = detect_region(state.utterance) if intent is Intent.TOP_UNIVERSITIES else None
        return {"region": region, "reply": self._canned.render(intent, region)}

    def _clarify_node(self, state: ReplyState) -> Dict:
        return {"reply": CLARIFY_REPLY}

    def _generate_node(self, state: ReplyState) -> Dict:
        client = self._generative_client()
        history = build_history(state.messages[:-1])
        response = client.send(self._system_instruction, history, state.utterance)
        return {"raw_reply": extract_reply_text(response)}

    def _sanitize_node(self, state: ReplyState) -> Dict:
        return {"reply": self._sanitizer.sanitize(state.raw_reply or "") or ""}

    def _dedup_node(self, state: ReplyState) -> Dict:
        return {"reply": self._suppressor.suppress(state.session_id, state.reply)}

    def _persist_node(self, state: ReplyState) -> Dict:
        entries: List[ConversationEntry] = [
            ConversationEntry(session_id=state.session_id, role="user", content=state.utterance)
        ]
        if state.record_reply:
            entries.append(
                ConversationEntry(session_id=state.session_id, role="assistant", content=state.reply)
            )
        for entry in entries:
            try:
                self._store.append(state.session_id, entry)
            except Exception:
                logger.exception("Failed to record %s entry for session %s", entry.role, state.session_id)
        return {}

    def _last_assistant_reply(self, session_id: str) -> Optional[str]:
        try:
            return self._store.last_assistant_reply(session_id)
        except Exception:
            logger.exception("Could not read conversation for session %s", session_id)
            return None

    def handle(self, messages: Sequence[Dict[str, str]], session_id: Optional[str] = None) -> ReplyOutcome:
        if not messages:
            raise ValidationError("messages array is required")

        session = session_id or new_session_id()
        state = ReplyState(
            session_id=session,
            messages=[dict(message) for message in messages],
            utterance=str(messages[-1].get("content") or "").strip(),
        )
        try:
            final_state = self.run(state)
        except Exception:
            logger.exception("Reply pipeline failed for session %s", session)
            return ReplyOutcome(
                reply=FAILURE_REPLY,
                session_id=session,
                intent=IntentResult(intent=Intent.UNKNOWN, score=0.0),
                failed=True,
            )
        return ReplyOutcome(
            reply=final_state.reply,
            session_id=session,
            intent=IntentResult(intent=final_state.intent, score=final_state.score),
        )

    def run(self, state: ReplyState) -> ReplyState:
        result = self._graph.invoke(asdict(state))
        if isinstance(result, ReplyState):
            return result
        if isinstance(result, dict):
            intent_value = result.get("intent", Intent.UNKNOWN)
            if not isinstance(intent_value, Intent):
                intent_value = Intent.from_label(intent_value)
            return ReplyState(
                session_id=result.get("session_id", state.session_id),
                messages=list(result.get("messages", [])),
                utterance=result.get("utterance", ""),
                intent=intent_value,
                score=float(result.get("score", 0.0)),
                region=result.get("region"),
                raw_reply=result.get("raw_reply"),
                reply=result.get("reply", ""),
                record_reply=bool(result.get("record_reply", True)),
            )
        raise TypeError(f"Unsupported state result from graph: {type(result)!r}")
