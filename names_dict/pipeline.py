"""Producer/consumer pipeline from record texts to a wordlist sink.

The producer runs in the caller's thread: it extracts candidates from every
record and feeds them to the histogram, pushing a name onto the bounded channel
when it crosses the threshold. A single consumer thread expands each name and
writes the variants, one per line. The histogram never leaves the producer and
the sink never leaves the consumer; only name strings cross the channel.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from names_dict.channel import BoundedChannel, ChannelClosed
from names_dict.config import Settings
from names_dict.dedupe import LineDeduper
from names_dict.extract import NameExtractor
from names_dict.histogram import ThresholdHistogram
from names_dict.variants import VariantExpander


logger = logging.getLogger(__name__)


class PipelineState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineStats:
    records: int = 0
    candidates: int = 0
    names: int = 0
    variants: int = 0
    duplicates: int = 0


class Pipeline:
    def __init__(self, settings: Settings, sink: TextIO) -> None:
        self.settings = settings
        self.sink = sink
        self.extractor = NameExtractor(settings.template)
        self.histogram = ThresholdHistogram(settings.threshold, fold_case=settings.fold_case)
        self.expander = VariantExpander(settings.digits, settings.special_chars)
        self.deduper = LineDeduper() if settings.exact_dedupe else None
        self.stats = PipelineStats()
        self.channel: BoundedChannel[str] = BoundedChannel(settings.capacity)
        self._state = PipelineState.IDLE
        self._consumer_error: Optional[BaseException] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    def _set_state(self, state: PipelineState) -> None:
        logger.debug("pipeline %s -> %s", self._state.value, state.value)
        self._state = state

    def run(self, records: Iterable[str]) -> PipelineStats:
        """Consume ``records`` once and block until every emitted name is written.

        Errors from either side cancel the channel and are re-raised here.
        """
        if self._state is not PipelineState.IDLE:
            raise RuntimeError("pipeline can only run once")
        consumer = threading.Thread(target=self._consume, name="names-dict-consumer", daemon=True)
        self._set_state(PipelineState.RUNNING)
        consumer.start()
        try:
            self._produce(records)
        except ChannelClosed:
            # The consumer cancelled the channel; its error is raised below.
            pass
        except BaseException:
            self._set_state(PipelineState.FAILED)
            self.channel.cancel()
            consumer.join()
            raise
        else:
            self._set_state(PipelineState.DRAINING)
            self.channel.close()
        consumer.join()
        if self._consumer_error is not None:
            self._set_state(PipelineState.FAILED)
            raise self._consumer_error
        if self.channel.cancelled:
            self._set_state(PipelineState.FAILED)
            raise RuntimeError("pipeline aborted")
        self._set_state(PipelineState.DONE)
        return self.stats

    def _produce(self, records: Iterable[str]) -> None:
        ranked = self.settings.count > 0
        for text in records:
            if self.channel.cancelled:
                raise ChannelClosed("consumer stopped")
            self.stats.records += 1
            for candidate in self.extractor.extract_candidates(text):
                self.stats.candidates += 1
                if self.histogram.observe(candidate) and not ranked:
                    self._emit(self.histogram.spelling(candidate))
        if ranked:
            for name, count in self.histogram.most_common(self.settings.count):
                logger.debug("ranked %s (%d)", name, count)
                self._emit(name)

    def _emit(self, name: str) -> None:
        logger.debug("emit %s", name)
        self.stats.names += 1
        self.channel.put(name)

    def _consume(self) -> None:
        try:
            for name in self.channel:
                self._write_variants(name)
        except BaseException as exc:
            self._consumer_error = exc
            self.channel.cancel()

    def _write_variants(self, name: str) -> None:
        try:
            for variant in self.expander.expand(name):
                if self.channel.cancelled:
                    return
                if self.deduper is not None and not self.deduper.admit(variant):
                    self.stats.duplicates += 1
                    continue
                self.sink.write(variant + "\n")
                self.stats.variants += 1
        except OSError as exc:
            raise RuntimeError(f"Filesystem error: {exc}") from exc


def run_pipeline(records: Iterable[str], settings: Settings, sink: TextIO) -> PipelineStats:
    return Pipeline(settings, sink).run(records)
