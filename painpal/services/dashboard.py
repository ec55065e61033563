# services/dashboard.py
from painpal import schemas
from painpal.services.streak import compute_day_streak
from painpal.storage import Storage

AVERAGE_PAIN_WINDOW = 7


class DashboardService:
    """Header figures for the home screen."""

    def get_stats(self, storage: Storage, *, user_id: int) -> schemas.DashboardStatsResponse:
        """
        Compute the user's day streak, recent average pain and latest mood.

        The day streak counts consecutive local calendar days, ending today,
        with at least one pain log of any level.
        """
        pain_logs = storage.list_pain_logs(user_id, limit=storage.streak_history_limit)
        latest_mood = storage.list_mood_logs(user_id, limit=1)
        interventions = storage.list_interventions(user_id)

        day_streak = compute_day_streak(
            (log.date for log in pain_logs), storage.now().date()
        )

        recent = pain_logs[:AVERAGE_PAIN_WINDOW]
        average_pain = (
            round(sum(log.pain_level for log in recent) / len(recent), 1)
            if recent
            else 0.0
        )

        return schemas.DashboardStatsResponse(
            day_streak=day_streak,
            average_pain=average_pain,
            latest_mood=latest_mood[0].mood if latest_mood else None,
            active_interventions=len(interventions),
        )


dashboard_service = DashboardService()
