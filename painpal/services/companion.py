# services/companion.py
import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from openai import OpenAI, OpenAIError

from painpal import schemas
from painpal.core.exceptions import ServiceError
from painpal.storage import Storage

logger = logging.getLogger(__name__)


# =====================================================================
# CONSTANTS
# =====================================================================

CHAT_FALLBACK = "I'm here to help! Could you tell me more?"
SUMMARY_FALLBACK = "Keep up the great work tracking your wellness journey!"
PATTERNS_FALLBACK = "No significant patterns detected yet."

CHAT_CONTEXT_SIZE = 5
SUMMARY_CONTEXT_SIZE = 7
PATTERN_CONTEXT_SIZE = 30

COMPANION_PERSONA = (
    "You are Pal, a compassionate AI wellness companion in the PainPal app. "
    "You help users track chronic pain and mood. Be empathetic and supportive, "
    "offer actionable advice, and keep responses concise but caring."
)

Message = Dict[str, str]


# =====================================================================
# COMPLETION CLIENTS
# =====================================================================

class CompletionClient(Protocol):
    """Single blocking text-completion call."""

    def complete(
        self, messages: List[Message], *, max_tokens: int, temperature: float
    ) -> Optional[str]: ...


class OpenAICompletionClient:
    """Chat-completions client; the SDK client is built on first use."""

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        self.api_key = api_key
        self.model = model
        self._client: Optional[OpenAI] = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key or None)
        return self._client

    def complete(
        self, messages: List[Message], *, max_tokens: int, temperature: float
    ) -> Optional[str]:
        try:
            completion = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as exc:
            raise ServiceError(f"Companion request failed: {exc}") from exc

        if not completion.choices:
            return None
        return completion.choices[0].message.content


# =====================================================================
# SERVICE CLASS
# =====================================================================

class CompanionService:
    """Builds the user's wellness context and asks the completion client about it."""

    def __init__(self, storage: Storage, client: CompletionClient):
        self.storage = storage
        self.client = client

    # =====================================================================
    # CONTEXT
    # =====================================================================

    def build_context(self, user_id: int, size: int = CHAT_CONTEXT_SIZE) -> Dict[str, Any]:
        """
        Collect recent pain, mood and active interventions for a user.

        Args:
            user_id: Owner of the data
            size: How many recent pain and mood entries to include

        Returns:
            JSON-serialisable dict with ``recent_pain``, ``recent_mood`` and
            ``interventions`` lists, newest entries first
        """
        pain_logs = self.storage.list_pain_logs(user_id, limit=size)
        mood_logs = self.storage.list_mood_logs(user_id, limit=size)
        interventions = self.storage.list_interventions(user_id)

        return {
            "recent_pain": [
                {"level": log.pain_level, "date": log.date.isoformat(), "notes": log.notes}
                for log in pain_logs
            ],
            "recent_mood": [
                {"mood": log.mood, "anxiety": log.anxiety_level, "date": log.date.isoformat()}
                for log in mood_logs
            ],
            "interventions": [
                {"name": i.name, "frequency": i.frequency, "streak": i.current_streak}
                for i in interventions
            ],
        }

    # =====================================================================
    # CHAT
    # =====================================================================

    def reply(self, user_id: int, content: str) -> schemas.ChatMessage:
        """Store the user's message, generate a reply and store that too."""
        self.storage.create_chat_message(user_id, content, is_from_user=True)

        context = self.build_context(user_id)
        system_prompt = (
            f"{COMPANION_PERSONA}\n\n"
            "User context:\n"
            f"Recent pain levels: {json.dumps(context['recent_pain'])}\n"
            f"Recent mood data: {json.dumps(context['recent_mood'])}\n"
            f"Active interventions: {json.dumps(context['interventions'])}"
        )

        text = self.client.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": content},
            ],
            max_tokens=300,
            temperature=0.7,
        )
        if not text:
            logger.warning(f"Empty companion reply for user {user_id}, using fallback")
            text = CHAT_FALLBACK

        return self.storage.create_chat_message(user_id, text, is_from_user=False)

    # =====================================================================
    # SUMMARIES
    # =====================================================================

    def daily_summary(self, user_id: int) -> str:
        """Short encouraging summary of the last week of entries."""
        context = self.build_context(user_id, size=SUMMARY_CONTEXT_SIZE)
        prompt = (
            "Generate a brief daily wellness summary for the user based on their "
            "recent data. Focus on trends, insights and gentle recommendations. "
            "Keep it encouraging and under 150 words.\n\n"
            f"Pain data: {json.dumps(context['recent_pain'])}\n"
            f"Mood data: {json.dumps(context['recent_mood'])}\n"
            f"Interventions: {json.dumps(context['interventions'])}"
        )

        text = self.client.complete(
            [{"role": "user", "content": prompt}], max_tokens=200, temperature=0.5
        )
        return text or SUMMARY_FALLBACK

    def pattern_insights(self, user_id: int) -> str:
        """Look for correlations between interventions, pain and mood."""
        pain_logs = self.storage.list_pain_logs(user_id, limit=PATTERN_CONTEXT_SIZE)
        mood_logs = self.storage.list_mood_logs(user_id, limit=PATTERN_CONTEXT_SIZE)
        intervention_logs = [
            {
                "name": i.name,
                "logs": [
                    {"pain": log.pain_level, "date": log.date.isoformat()}
                    for log in self.storage.list_intervention_logs(
                        user_id, i.id, limit=PATTERN_CONTEXT_SIZE
                    )
                ],
            }
            for i in self.storage.list_interventions(user_id)
        ]

        pain_data = [
            {"level": p.pain_level, "date": p.date.isoformat(), "tags": p.tags}
            for p in pain_logs
        ]
        mood_data = [
            {"mood": m.mood, "anxiety": m.anxiety_level, "date": m.date.isoformat()}
            for m in mood_logs
        ]
        prompt = (
            "Analyze the user's recent wellness data to find correlations between "
            "interventions, pain levels and mood. Provide a few short insights if "
            "any patterns stand out.\n\n"
            f"Pain logs: {json.dumps(pain_data)}\n"
            f"Mood logs: {json.dumps(mood_data)}\n"
            f"Intervention logs: {json.dumps(intervention_logs)}"
        )

        text = self.client.complete(
            [{"role": "user", "content": prompt}], max_tokens=200, temperature=0.5
        )
        return text or PATTERNS_FALLBACK
