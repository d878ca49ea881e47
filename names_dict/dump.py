"""Streaming access to MediaWiki XML dumps, local or remote, plain or bzip2."""

import bz2
import logging
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from typing import BinaryIO, Iterator

import requests


logger = logging.getLogger(__name__)

CHUNK_TIMEOUT = 120


class DumpError(RuntimeError):
    """The dump cannot be fetched, decompressed or parsed. Always fatal."""


def local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@contextmanager
def open_dump(source: str) -> Iterator[BinaryIO]:
    """Yield a binary stream of the decompressed dump XML.

    Remote dumps are streamed, never stored. ``.bz2`` sources are decompressed
    on the fly.
    """
    response = None
    try:
        if is_remote(source):
            logger.info("Fetching dump from %s", source)
            response = requests.get(source, stream=True, timeout=CHUNK_TIMEOUT)
            response.raise_for_status()
            response.raw.decode_content = True
            raw: BinaryIO = response.raw
        else:
            logger.info("Reading dump from %s", source)
            raw = open(source, "rb")
    except requests.RequestException as exc:
        if response is not None:
            response.close()
        raise DumpError(f"Unable to fetch dump: {exc}") from exc
    except OSError as exc:
        raise DumpError(f"Unable to open dump: {exc}") from exc

    stream: BinaryIO = bz2.open(raw, "rb") if source.endswith(".bz2") else raw
    try:
        yield stream
    finally:
        stream.close()
        raw.close()
        if response is not None:
            response.close()


def iter_records(stream: BinaryIO) -> Iterator[str]:
    """Yield the text of the first revision of every page, in dump order."""
    root = None
    try:
        for event, elem in ET.iterparse(stream, events=("start", "end")):
            if root is None:
                root = elem
            if event != "end" or local_name(elem.tag) != "page":
                continue
            text = None
            for child in elem:
                if local_name(child.tag) == "revision":
                    for field in child:
                        if local_name(field.tag) == "text":
                            text = field.text
                    break
            if text:
                yield text
            # Drop finished pages so memory stays flat over the whole dump.
            root.clear()
    except ET.ParseError as exc:
        raise DumpError(f"Error decoding XML: {exc}") from exc
    except (OSError, EOFError, requests.RequestException) as exc:
        raise DumpError(f"Error reading dump: {exc}") from exc


def read_dump(source: str) -> Iterator[str]:
    with open_dump(source) as stream:
        yield from iter_records(stream)
