from __future__ import annotations

from hoststat.core.schemas import GraphSample, StatSnapshot


def missing_fields(sample: GraphSample, snapshot: StatSnapshot) -> list[str]:
    missing = [f"graph.{k}" for k, v in sample.model_dump().items() if v is None]
    missing += [f"stat.{k}" for k, v in snapshot.model_dump().items() if v is None]
    return missing


def check_cycle(
    sample: GraphSample, snapshot: StatSnapshot
) -> tuple[GraphSample, StatSnapshot] | None:
    """Return the pair when every field was measured, None to skip the cycle.

    Each stored row must be complete so charts can rely on fixed-width series.
    """
    if missing_fields(sample, snapshot):
        return None
    return sample, snapshot
