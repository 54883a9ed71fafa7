"""Session statuses and user-facing session messages."""

from enum import Enum


class SessionStatus(str, Enum):
    """Where a planning session is in its lifecycle."""

    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    ADJUSTING = "adjusting"
    SYNCING = "syncing"
    ERROR = "error"


GENERATION_STATUSES = (SessionStatus.GENERATING, SessionStatus.ADJUSTING)

GENERATION_FAILED_MESSAGE = "無法產生行程。請確認您的請求內容或稍後再試。"
GENERATION_IN_FLIGHT_MESSAGE = "行程正在產生中，請稍候再試。"
MISSING_REQUEST_MESSAGE = "找不到原始旅遊資訊，請重新產生行程。"
NOTHING_TO_ADJUST_MESSAGE = "目前沒有可調整的行程，請先產生新的旅遊計畫。"
EMPTY_FEEDBACK_MESSAGE = "請輸入想調整的內容。"
NOTHING_TO_SAVE_MESSAGE = "目前沒有可儲存的行程。"
NOTHING_TO_SYNC_MESSAGE = "目前沒有可同步的行程，請先產生新的旅遊計畫。"
SYNC_IN_FLIGHT_MESSAGE = "行程正在同步中，請稍候再試。"
SYNC_NOT_CONFIGURED_MESSAGE = "尚未設定旅遊書同步服務。"
UNKNOWN_TRIP_MESSAGE = "找不到指定的已儲存行程。"


def sync_success_message(file_id: str) -> str:
    return f"成功同步！您的行程 ID 為：{file_id}"
