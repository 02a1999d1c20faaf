"""User-facing error and success messages."""

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class FriendlyError:
    """Short title and actionable message shown to the user."""

    title: str
    message: str


ERROR_MESSAGES: dict[str, FriendlyError] = {
    "network": FriendlyError(
        "Connection Issue 📡",
        "I'm having trouble connecting. Mind checking your internet?",
    ),
    "timeout": FriendlyError(
        "Taking Too Long ⏱️",
        "This is taking longer than usual. Want to try again?",
    ),
    "server": FriendlyError(
        "Oops! 🤔",
        "Something went wrong on our end. Give it another shot?",
    ),
    "invalid_credentials": FriendlyError(
        "Hmm... 🤔",
        "That email and password combo doesn't match. Want to try again?",
    ),
    "email_exists": FriendlyError(
        "Already Have You! 👋",
        "Looks like you already have an account. Try logging in instead?",
    ),
    "camera_permission": FriendlyError(
        "Camera Access Needed 📷",
        "I need camera permission to take photos. Enable it in settings?",
    ),
    "food_log_failed": FriendlyError(
        "Logging Issue 🍽️",
        "Had trouble saving that meal. Want to try again?",
    ),
    "delete_failed": FriendlyError(
        "Delete Didn't Work ❌",
        "Couldn't remove that item. Give it another shot?",
    ),
    "load_failed": FriendlyError(
        "Loading Issue 📊",
        "Couldn't load your data. Check your connection and try again?",
    ),
    "update_failed": FriendlyError(
        "Update Issue ⚙️",
        "Couldn't save your changes. Try again?",
    ),
    "generic": FriendlyError(
        "Something Went Wrong 🤷",
        "Not sure what happened there. Mind trying again?",
    ),
}

SUCCESS_MESSAGES: dict[str, FriendlyError] = {
    "meal_logged": FriendlyError("Logged! 🎉", "Great job staying consistent!"),
    "profile_updated": FriendlyError(
        "Updated! ✅",
        "I've got your latest info. Let's keep crushing those goals!",
    ),
    "photo_saved": FriendlyError(
        "Photo Saved! 📸",
        "Your progress is being captured. Keep it up!",
    ),
    "meal_deleted": FriendlyError("Removed! ✓", "Entry deleted successfully."),
}


class CoachApiError(RuntimeError):
    """Raised when a user-initiated backend call fails."""

    def __init__(
        self,
        friendly: FriendlyError,
        status_code: int | None = None,
    ) -> None:
        super().__init__(friendly.message)
        self.friendly = friendly
        self.status_code = status_code


def status_code_of(exc: BaseException) -> int | None:
    """Extract an HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def friendly_error(exc: BaseException, fallback: str = "generic") -> FriendlyError:
    """Map an exception to a friendly message.

    ``fallback`` names the message used when nothing more specific matches.
    """
    if isinstance(exc, CoachApiError):
        return exc.friendly
    if isinstance(exc, httpx.TimeoutException):
        return ERROR_MESSAGES["timeout"]
    if isinstance(exc, httpx.TransportError):
        return ERROR_MESSAGES["network"]

    status_code = status_code_of(exc)
    text = str(exc).lower()
    if "network" in text or "connection" in text:
        return ERROR_MESSAGES["network"]
    if "timeout" in text:
        return ERROR_MESSAGES["timeout"]
    if (status_code is not None and status_code >= 500) or "server" in text:
        return ERROR_MESSAGES["server"]
    if "invalid credentials" in text or "password" in text or status_code == 401:
        return ERROR_MESSAGES["invalid_credentials"]
    if "email already" in text or "user exists" in text:
        return ERROR_MESSAGES["email_exists"]
    if "camera" in text or "permission" in text:
        return ERROR_MESSAGES["camera_permission"]
    return ERROR_MESSAGES.get(fallback, ERROR_MESSAGES["generic"])
