"""
Encounter Legality - Bulk scan and batch synthesis
Candidates and synthesis requests are independent units of work, so they
are fanned out on a thread pool and collected as they finish.

Cancellation is cooperative: the event is checked before each candidate
starts and between template evaluations inside the finder.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from . import config
from .criteria import UNRESTRICTED, TraitCriteria
from .entity import Entity, TrainerInfo
from .errors import InvalidTemplateReference, MalformedCandidate, PolicyUnsatisfiable
from .finder import EncounterFinder, EncounterMatch, get_encounter_finder
from .pipeline import ConversionPipeline
from .templates import TemplateStore

# =============================================================================
# BULK SCAN
# =============================================================================


@dataclass
class ScanResult:
    index: int
    candidate: Entity
    matches: List[EncounterMatch] = field(default_factory=list)

    @property
    def best(self) -> Optional[EncounterMatch]:
        return self.matches[0] if self.matches else None

    @property
    def is_legal(self) -> bool:
        return bool(self.matches)


def _scan_one(finder, index, candidate, cancel_event):
    if cancel_event.is_set():
        return None
    try:
        return ScanResult(index, candidate, finder.find_matches(candidate, cancel_event=cancel_event))
    except MalformedCandidate as e:
        print(f"[Scanner] Candidate {index} skipped: {e}")
        return None


def scan_candidates(candidates: Iterable[Entity], store: Optional[TemplateStore] = None,
                    workers: Optional[int] = None,
                    cancel_event: Optional[threading.Event] = None,
                    finder: Optional[EncounterFinder] = None) -> List[ScanResult]:
    """
    Run the encounter finder over every candidate in parallel.

    Malformed candidates are reported and skipped. When cancel_event is set
    the scan stops early and returns what was collected so far; results are
    ordered by candidate index either way.
    """
    finder = finder or get_encounter_finder()
    if store is not None:
        finder = EncounterFinder(store, finder.species, finder.engine, finder.form_info)
    cancel_event = cancel_event or threading.Event()
    workers = workers or config.DEFAULT_WORKERS

    results: List[ScanResult] = []
    candidates = list(candidates)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_scan_one, finder, index, candidate, cancel_event)
            for index, candidate in enumerate(candidates)
        ]
        for future in as_completed(futures):
            if future.cancelled():
                continue
            result = future.result()
            if result is not None:
                results.append(result)
            if cancel_event.is_set():
                for pending in futures:
                    pending.cancel()

    if cancel_event.is_set():
        print(f"[Scanner] Cancelled: {len(results)}/{len(candidates)} candidate(s) scanned")
    else:
        legal = sum(1 for r in results if r.is_legal)
        print(f"[Scanner] Scanned {len(results)} candidate(s), {legal} with a matching encounter")

    results.sort(key=lambda r: r.index)
    return results


# =============================================================================
# BATCH SYNTHESIS
# =============================================================================


@dataclass(frozen=True)
class SynthesisRequest:
    template_id: str
    trainer: Optional[TrainerInfo] = None
    criteria: TraitCriteria = UNRESTRICTED


@dataclass
class SynthesisOutcome:
    request: SynthesisRequest
    entity: Optional[Entity] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.entity is not None


def _synthesize_one(pipeline, request):
    try:
        entity = pipeline.synthesize(request.template_id, request.trainer, request.criteria)
        return SynthesisOutcome(request, entity=entity)
    except (PolicyUnsatisfiable, InvalidTemplateReference) as e:
        print(f"[Scanner] Request {request.template_id} failed: {e}")
        return SynthesisOutcome(request, error=e)


def synthesize_batch(requests: Iterable[SynthesisRequest], pipeline: ConversionPipeline,
                     workers: Optional[int] = None) -> List[SynthesisOutcome]:
    """
    Synthesize every request independently. A request that cannot be
    satisfied is recorded on its own outcome; the rest of the batch runs.
    Outcomes come back in request order.
    """
    requests = list(requests)
    workers = workers or config.DEFAULT_WORKERS
    with ThreadPoolExecutor(max_workers=workers) as executor:
        outcomes = list(executor.map(lambda r: _synthesize_one(pipeline, r), requests))

    failed = sum(1 for o in outcomes if not o.ok)
    print(f"[Scanner] Synthesized {len(outcomes) - failed}/{len(outcomes)} request(s)")
    return outcomes
