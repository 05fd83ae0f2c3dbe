"""Browser session interface and the conference session slots."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator

from .exceptions import ConsoleLogUnavailableError
from .models import Role


class BrowserSession(ABC):
    """Capabilities the harness needs from one controlled browser."""

    @abstractmethod
    def evaluate(self, script: str) -> Any:
        """
        Run a script in the page context.

        Returns:
            The script's return value, or None
        """
        pass

    @abstractmethod
    def screenshot_png(self) -> bytes:
        """Return a screenshot of the current page as PNG bytes."""
        pass

    @abstractmethod
    def page_source(self) -> str:
        """Return the current page markup."""
        pass

    @abstractmethod
    def console_entries(self) -> list:
        """
        Return the browser console entries collected so far.

        Raises:
            ConsoleLogUnavailableError: if the browser cannot provide them
        """
        pass


class WebDriverSession(BrowserSession):
    """BrowserSession backed by a Selenium WebDriver."""

    def __init__(self, driver: Any):
        self.driver = driver

    def evaluate(self, script: str) -> Any:
        return self.driver.execute_script(script)

    def screenshot_png(self) -> bytes:
        return self.driver.get_screenshot_as_png()

    def page_source(self) -> str:
        return self.driver.page_source

    def console_entries(self) -> list:
        # Only Chromium based drivers implement get_log
        get_log = getattr(self.driver, "get_log", None)
        if get_log is None:
            raise ConsoleLogUnavailableError(
                f"{type(self.driver).__name__} does not support console log retrieval"
            )
        return list(get_log("browser"))

    def __repr__(self) -> str:
        return f"WebDriverSession({self.driver!r})"


def as_session(obj: Any) -> BrowserSession:
    """Wrap a raw driver, pass BrowserSession instances through."""
    if isinstance(obj, BrowserSession):
        return obj
    return WebDriverSession(obj)


def unwrap_driver(session: Any) -> Any:
    """Return the driver behind a session, or the object itself."""
    if isinstance(session, WebDriverSession):
        return session.driver
    return session


@dataclass
class ConferenceSessions:
    """Browser sessions taking part in a conference test, by role.

    Sessions are borrowed from the fixtures that own them.
    """

    owner: BrowserSession | None = None
    second_participant: BrowserSession | None = None
    third_participant: BrowserSession | None = None

    @classmethod
    def of(cls, owner: Any = None, second_participant: Any = None, third_participant: Any = None) -> "ConferenceSessions":
        """Build from raw drivers or sessions, ignoring absent ones."""
        return cls(
            owner=as_session(owner) if owner is not None else None,
            second_participant=as_session(second_participant) if second_participant is not None else None,
            third_participant=as_session(third_participant) if third_participant is not None else None,
        )

    def get(self, role: Role) -> BrowserSession | None:
        return getattr(self, _SLOTS[role])

    def active(self) -> Iterator[tuple[Role, BrowserSession]]:
        """Yield present sessions in capture order: owner, participant, third."""
        for role in Role:
            session = self.get(role)
            if session is not None:
                yield role, session

    def __bool__(self) -> bool:
        return any(True for _ in self.active())


_SLOTS = {
    Role.OWNER: "owner",
    Role.SECOND_PARTICIPANT: "second_participant",
    Role.THIRD_PARTICIPANT: "third_participant",
}
