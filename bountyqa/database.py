"""In-memory state store.

All engine state lives in one ``Store``. Each operation runs entirely inside
``Store.transaction()``: its checks and its mutations hold the same lock, so
operations are serialized. Mutations go through ``touch``/``put``/``add``,
which record the previous value of just that entry in an undo log; if the
operation raises, the log is replayed backwards and the store is left as it
was.
"""

import threading
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Dict, Hashable, Iterator, List, Set, Tuple

from bountyqa.models.answer import Answer, ContentKey, VoteTally
from bountyqa.models.question import Question
from bountyqa.models.reputation import ReputationRecord


_MISSING = object()

# Plain integer attributes, saved in full at the start of every transaction
_COUNTERS = ("next_question_id", "next_answer_id", "treasury_balance")


class Store:
    """Single consistent store for questions, answers, votes and balances."""

    def __init__(self):
        self._lock = threading.RLock()
        self._depth = 0
        self._undo: List[Tuple[str, str, Any, Any]] = []
        self._saved: Set[Tuple[str, Hashable]] = set()

        self.questions: Dict[int, Question] = {}
        self.answers: Dict[int, Answer] = {}
        self.next_question_id = 1
        self.next_answer_id = 1

        # (question_id, provider) pairs, never removed
        self.answered: Set[Tuple[int, str]] = set()
        self.awarded: Dict[int, int] = {}

        self.tallies: Dict[ContentKey, VoteTally] = {}
        self.vote_records: Set[Tuple[ContentKey, str]] = set()
        self.reputation: Dict[str, ReputationRecord] = {}

        self.treasury_balance = 0

        # Used by InMemoryFundLedger
        self.balances: Dict[str, int] = {}

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Run a block atomically. Nested blocks join the outer transaction."""
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            counters = {name: getattr(self, name) for name in _COUNTERS}
            self._depth = 1
            try:
                yield self
            except BaseException:
                self._rollback(counters)
                raise
            finally:
                self._depth = 0
                self._undo = []
                self._saved = set()

    def _require_transaction(self) -> None:
        if not self._depth:
            raise RuntimeError("Store mutations must run inside Store.transaction()")

    def _rollback(self, counters: Dict[str, int]) -> None:
        for kind, name, key, old in reversed(self._undo):
            container = getattr(self, name)
            if kind == "set":
                container.discard(key)
            elif old is _MISSING:
                container.pop(key, None)
            else:
                container[key] = old
        for name, value in counters.items():
            setattr(self, name, value)

    def touch(self, name: str, key: Hashable) -> None:
        """Record the current value of ``self.<name>[key]`` before changing it.

        Only the first touch of an entry per transaction is recorded.
        """
        self._require_transaction()
        if (name, key) in self._saved:
            return
        self._saved.add((name, key))
        old = getattr(self, name).get(key, _MISSING)
        self._undo.append(("map", name, key, old if old is _MISSING else deepcopy(old)))

    def put(self, name: str, key: Hashable, value: Any) -> None:
        self.touch(name, key)
        getattr(self, name)[key] = value

    def add(self, name: str, item: Hashable) -> None:
        """Add to one of the append-only sets."""
        self._require_transaction()
        container = getattr(self, name)
        if item not in container:
            container.add(item)
            self._undo.append(("set", name, item, None))

    def allocate_question_id(self) -> int:
        self._require_transaction()
        question_id = self.next_question_id
        self.next_question_id += 1
        return question_id

    def allocate_answer_id(self) -> int:
        self._require_transaction()
        answer_id = self.next_answer_id
        self.next_answer_id += 1
        return answer_id

    def tally(self, key: ContentKey) -> VoteTally:
        """Tally for a content key, zero if nobody has voted yet."""
        return self.tallies.get(key) or VoteTally()
