import random
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..core.errors import InsufficientBalanceError


def test_opposite_direction_transfers_do_not_deadlock(
    transfer_engine, open_account, balance_of, row_counts
) -> None:
    a = open_account("alice", balance=1000)
    b = open_account("bob", balance=1000)
    _, entries_before = row_counts()

    pairs = [(a, b), (b, a)] * 10
    random.Random(7).shuffle(pairs)

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [
            pool.submit(transfer_engine.execute_transfer, src, dst, 10)
            for src, dst in pairs
        ]
        results = [future.result(timeout=60) for future in futures]

    assert len(results) == 20
    assert balance_of(a) == 1000
    assert balance_of(b) == 1000
    assert row_counts() == (20, entries_before + 40)


def test_concurrent_drain_only_lets_fitting_transfers_through(
    transfer_engine, executor, open_account, balance_of
) -> None:
    source = open_account("alice", balance=1000)
    dest = open_account("bob")

    succeeded = 0
    rejected = 0
    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [
            pool.submit(transfer_engine.execute_transfer, source, dest, 300)
            for _ in range(10)
        ]
        for future in as_completed(futures, timeout=60):
            try:
                future.result()
                succeeded += 1
            except InsufficientBalanceError:
                rejected += 1

    assert succeeded == 3
    assert rejected == 7
    assert balance_of(source) == 100
    assert balance_of(dest) == 900
    for account_id in (source, dest):
        assert executor.run(lambda r: r.entries_total(account_id)) == balance_of(account_id)
