"""In-memory, session-scoped history of assessments."""

from collections.abc import Iterator

from src.calculators.paye import AssessmentResult


class AssessmentHistory:
    """Append-only log of results for one session.

    Entries are kept in insertion order and are never modified or removed.
    Nothing is persisted: the history lives as long as the session object.
    """

    def __init__(self) -> None:
        self._entries: list[AssessmentResult] = []

    def append(self, result: AssessmentResult) -> None:
        self._entries.append(result)

    def latest_first(self) -> list[AssessmentResult]:
        """Entries ordered by created_at, newest first.

        Results sharing a timestamp keep reverse insertion order.
        """
        indexed = sorted(
            enumerate(self._entries),
            key=lambda pair: (pair[1].created_at, pair[0]),
            reverse=True,
        )
        return [result for _, result in indexed]

    def latest(self) -> AssessmentResult | None:
        ordered = self.latest_first()
        return ordered[0] if ordered else None

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[AssessmentResult]:
        return iter(list(self._entries))
