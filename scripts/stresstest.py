"""Hammer one dispatcher from many threads and report open/write counts."""

from __future__ import annotations

import threading
import time

import click
from rich.console import Console
from rich.table import Table

from lib_log_syslog import DispatchHub, create_dispatcher, get
from lib_log_syslog.adapters import MemorySyslogBackend


@click.command()
@click.option("--threads", type=click.IntRange(min=1), default=16, show_default=True)
@click.option("--events", type=click.IntRange(min=1), default=1000, show_default=True, help="Events per thread.")
def main(threads: int, events: int) -> None:
    backend = MemorySyslogBackend()
    hub = DispatchHub()
    hub.register(create_dispatcher(ident="stresstest", backend=backend))
    barrier = threading.Barrier(threads)

    def worker(index: int) -> None:
        logger = get(f"Worker{index}", hub=hub)
        barrier.wait()
        for number in range(events):
            logger.info(f"event {number}")

    started = time.perf_counter()
    pool = [threading.Thread(target=worker, args=(index,)) for index in range(threads)]
    for thread in pool:
        thread.start()
    for thread in pool:
        thread.join()
    elapsed = time.perf_counter() - started

    table = Table(title="Dispatcher stress test")
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_row("threads", str(threads))
    table.add_row("backend opens", str(backend.open_count))
    table.add_row("records written", str(len(backend.records)))
    table.add_row("expected", str(threads * events))
    table.add_row("seconds", f"{elapsed:.3f}")
    Console().print(table)
    if backend.open_count != 1 or len(backend.records) != threads * events:
        raise SystemExit(1)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    main()
