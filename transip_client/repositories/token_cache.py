import abc


class TokenCache(abc.ABC):
    """
    Defines the contract for any store keeping issued tokens between runs
    (memory, file, secret store, etc.).
    """

    @abc.abstractmethod
    def get(self, key: str) -> str | None:
        """
        Return the raw token stored under `key`, or None when there is none.
        """
        pass

    @abc.abstractmethod
    def set(self, key: str, token: str) -> None:
        """
        Insert or replace the raw token stored under `key`.
        """
        pass
