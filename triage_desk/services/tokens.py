"""Token store: the authoritative record of every active token."""

from triage_desk.errors import TokenNotFound
from triage_desk.models.token import Token, TokenKind


class TokenStore:
    """Maps token id to Token and hands out token ids.

    Ids come from one increasing counter and are never reused, including ids
    handed out for tokens that were discarded before being stored.
    """

    def __init__(self, first_token_id: int = 1):
        self._tokens: dict[int, Token] = {}
        self._next_token_id = first_token_id

    def __contains__(self, token_id: int) -> bool:
        return token_id in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def new_token(
        self,
        patient_id: int,
        kind: TokenKind,
        doctor_id: int | None = None,
        slot_id: int | None = None,
    ) -> Token:
        """Create a token with a fresh id. It is not stored until add() is called."""
        token = Token(
            token_id=self._next_token_id,
            patient_id=patient_id,
            kind=kind,
            doctor_id=doctor_id,
            slot_id=slot_id,
        )
        self._next_token_id += 1
        return token

    def add(self, token: Token) -> None:
        self._tokens[token.token_id] = token

    def get(self, token_id: int) -> Token:
        token = self._tokens.get(token_id)
        if token is None:
            raise TokenNotFound(token_id)
        return token

    def remove(self, token_id: int) -> Token | None:
        return self._tokens.pop(token_id, None)

    def all(self) -> list[Token]:
        """Active tokens ordered by id."""
        return [self._tokens[token_id] for token_id in sorted(self._tokens)]
