from abc import ABC, abstractmethod

from link_budget.application.session import LinkBudgetSession


class BaseSessionStorage(ABC):
    """
    Abstract base class that defines the interface for persisting sessions.
    """

    @abstractmethod
    async def load(self, name: str) -> LinkBudgetSession:
        """
        Asynchronously load a session from a file or another source.

        :param name: The session name (without extension) to load.
        :return: An instance of LinkBudgetSession.
        """
        pass

    @abstractmethod
    async def store(self, name: str, session: LinkBudgetSession) -> None:
        """
        Asynchronously store a session to a file or another storage.

        :param name: The session name (without extension) to store under.
        """
        pass
