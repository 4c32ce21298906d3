import asyncio

import pytest

from intake.executor import ImportExecutor
from intake.models import ImportOutcome, OrganizationOutcome
from intake.normalizers.row_normalizer import OrganizationBuilder
from intake.pipelines import OrganizationPipeline
from intake.stores import InsertResult, MemoryStore


class FlakyStore(MemoryStore):
    """Fails inserts for chosen names; raises for others."""

    def __init__(self, unique_keys=None, failing=(), raising=()):
        super().__init__(unique_keys)
        self.failing = set(failing)
        self.raising = set(raising)

    async def insert(self, table, row):
        if row.get('name') in self.raising:
            raise ConnectionError('backend went away')
        if row.get('name') in self.failing:
            return InsertResult(error_reason='constraint violated')
        return await super().insert(table, row)


def organizations(*names):
    builder = OrganizationBuilder()
    return [builder.build({'name': name}, row_number=i) for i, name in enumerate(names, start=1)]


@pytest.fixture()
def pipeline(config):
    return OrganizationPipeline(config)


@pytest.mark.parametrize('concurrency', [1, 3])
def test_counts_created_duplicates_and_errors(pipeline, concurrency: int) -> None:
    store = FlakyStore(failing={'Broken AG'}, raising={'Offline KG'})
    asyncio.run(store.insert(pipeline.table, {'name': 'Existing GmbH'}))

    records = organizations('Acme GmbH', 'Existing GmbH', 'Broken AG', 'Globex SE', 'Offline KG')
    outcome = asyncio.run(ImportExecutor(store, concurrency).run(pipeline, records))

    n, duplicates, errors = len(records), 1, 2
    assert outcome.created == n - duplicates - errors
    assert outcome.duplicates == duplicates
    assert outcome.errors == errors
    assert sorted(issue.row for issue in outcome.issues) == [3, 5]
    assert {r['name'] for r in store.rows(pipeline.table)} == {'Existing GmbH', 'Acme GmbH', 'Globex SE'}


def test_sequential_order_and_progress(pipeline) -> None:
    store = MemoryStore()
    progress = []
    records = organizations('A', 'B', 'C', 'D')

    asyncio.run(ImportExecutor(store, on_progress=progress.append).run(pipeline, records))

    assert progress == [25, 50, 75, 100]
    assert [r['name'] for r in store.rows(pipeline.table)] == ['A', 'B', 'C', 'D']


def test_progress_is_monotonic_with_workers(pipeline) -> None:
    progress = []
    records = organizations(*[f'Org {i}' for i in range(7)])
    asyncio.run(ImportExecutor(MemoryStore(), 4, on_progress=progress.append).run(pipeline, records))
    assert progress == sorted(progress)
    assert progress[-1] == 100
    assert len(progress) == 7


@pytest.mark.parametrize('concurrency', [1, 2])
def test_failing_progress_callback_does_not_abort_batch(pipeline, concurrency: int) -> None:
    def on_progress(percent):
        raise RuntimeError('display closed')

    store = MemoryStore()
    completed = []
    outcome = asyncio.run(
        ImportExecutor(store, concurrency, on_progress=on_progress, on_complete=completed.append)
        .run(pipeline, organizations('A', 'B', 'C'))
    )

    assert outcome.created == 3
    assert len(store.rows(pipeline.table)) == 3
    assert completed == [outcome]


def test_on_complete_called_once_with_final_outcome(pipeline) -> None:
    completed = []
    outcome = asyncio.run(
        ImportExecutor(MemoryStore(), on_complete=completed.append).run(pipeline, organizations('A', 'B'))
    )
    assert completed == [outcome]
    assert outcome.created == 2


def test_empty_batch_completes(pipeline) -> None:
    completed = []
    outcome = asyncio.run(ImportExecutor(MemoryStore(), on_complete=completed.append).run(pipeline, []))
    assert outcome.as_dict() == {'created': 0, 'duplicates': 0, 'errors': 0, 'skipped_incomplete': 0}
    assert len(completed) == 1


def test_accumulates_into_given_outcome(pipeline) -> None:
    outcome = OrganizationOutcome()
    outcome.record_skipped(4, ['name'])
    result = asyncio.run(ImportExecutor(MemoryStore()).run(pipeline, organizations('A'), outcome))
    assert result is outcome
    assert result.as_dict() == {'created': 1, 'duplicates': 0, 'errors': 0, 'skipped_incomplete': 1}


def test_unique_conflict_counts_as_duplicate(pipeline) -> None:
    class RacingStore(MemoryStore):
        async def find_one(self, table, filters):
            return None

    store = RacingStore({pipeline.table: ('domain',)})
    builder = OrganizationBuilder()
    records = [
        builder.build({'name': 'Acme', 'domain': 'acme.de'}, row_number=1),
        builder.build({'name': 'Acme Germany', 'website': 'https://www.acme.de'}, row_number=2),
    ]
    outcome = asyncio.run(ImportExecutor(store).run(pipeline, records))
    assert outcome.created == 1
    assert outcome.duplicates == 1


def test_concurrency_is_clamped() -> None:
    assert ImportExecutor(MemoryStore(), 0).concurrency == 1


def test_outcome_base_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        ImportOutcome()
