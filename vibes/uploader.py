"""Upload markdown documentation as vectors to a vector index."""

from __future__ import annotations

import argparse
import json
import os
import stat
import sys
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import requests

EMBEDDING_DIMENSION = 1536
EMBEDDING_FILL = 0.01
DEFAULT_HOST = "https://index.example.com"
HOST_ENV = "PINECONE_HOST"
TOKEN_ENV = "PINECONE_API_KEY"


@dataclass
class Record:
    """A vector record; empty values and metadata are left out of the payload."""

    id: str
    values: list[float] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id}
        if self.values:
            payload["values"] = list(self.values)
        if self.metadata:
            payload["metadata"] = dict(self.metadata)
        return payload


@dataclass
class NamespaceStats:
    """Statistics about one namespace of an index."""

    vector_count: int = 0


@dataclass
class IndexStats:
    """Statistics about an index."""

    dimension: int = 0
    index_fullness: float = 0.0
    namespaces: dict[str, NamespaceStats] = field(default_factory=dict)
    total_vector_count: int = 0
    vector_type: str = ""
    metric: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> IndexStats:
        if not isinstance(data, dict):
            raise TypeError("index stats must be a JSON object")
        namespaces = data.get("namespaces") or {}
        if not isinstance(namespaces, dict):
            raise TypeError("namespaces must be a JSON object")
        return cls(
            dimension=int(data.get("dimension") or 0),
            index_fullness=float(data.get("index_fullness") or 0.0),
            namespaces={
                str(name): NamespaceStats(int((entry or {}).get("vector_count") or 0))
                for name, entry in namespaces.items()
            },
            total_vector_count=int(data.get("total_vector_count") or 0),
            vector_type=str(data.get("vector_type") or ""),
            metric=str(data.get("metric") or ""),
        )


@dataclass
class DocumentRecord:
    """A document read from disk, ready to be embedded."""

    id: str
    content: str
    metadata: dict[str, str] = field(default_factory=dict)


def _host() -> str:
    return os.environ.get(HOST_ENV, DEFAULT_HOST).rstrip("/")


def _walk(path: str) -> Iterator[str]:
    """Yield non-directory paths under ``path`` in lexical order, not following links."""
    if stat.S_ISDIR(os.lstat(path).st_mode):
        with os.scandir(path) as entries:
            ordered = sorted(entries, key=lambda entry: entry.name)
        for entry in ordered:
            yield from _walk(entry.path)
    else:
        yield path


def extract_title(content: str) -> str:
    """Take a title from front matter, else from the first level-one heading."""
    if content.startswith("---"):
        end = content[3:].find("---")
        if end > 0:
            for line in content[3 : end + 3].split("\n"):
                if line.startswith("title:"):
                    return line[len("title:") :].strip()
    for line in content.split("\n"):
        if line.startswith("# "):
            return line[2:].strip()
    return ""


def process_markdown_files(root_path: str | os.PathLike[str]) -> list[DocumentRecord]:
    """Read every ``.md`` file under ``root_path`` into a document record."""
    root = os.fspath(root_path)
    documents: list[DocumentRecord] = []
    try:
        for path in _walk(root):
            name = os.path.basename(path)
            if not name.lower().endswith(".md"):
                continue
            with open(path, "rb") as handle:
                content = handle.read().decode("utf-8", errors="replace")
            try:
                rel_path = os.path.relpath(path, root)
            except ValueError:
                rel_path = path
            title = extract_title(content) or name
            documents.append(
                DocumentRecord(
                    id=rel_path.replace(os.sep, "-"),
                    content=content,
                    metadata={"path": rel_path, "title": title, "filename": name},
                )
            )
            print(f"Processed file: {rel_path}")
    except OSError as exc:
        raise RuntimeError(f"error walking through directory: {exc}") from exc
    return documents


def get_embeddings(texts: Sequence[str]) -> list[list[float]]:
    """Return a constant placeholder embedding of the index's dimension per text."""
    return [[EMBEDDING_FILL] * EMBEDDING_DIMENSION for _ in texts]


def _headers(token: str) -> dict[str, str]:
    return {"Api-Key": token, "Content-Type": "application/json"}


def _check(response: requests.Response) -> None:
    if response.status_code != 200:
        raise RuntimeError(
            f"unexpected status code: {response.status_code}, response: {response.text}"
        )


def upsert_records(records: Sequence[Record], namespace: str, token: str) -> None:
    """Send records to the index's upsert endpoint."""
    payload = {"vectors": [record.to_dict() for record in records], "namespace": namespace}
    try:
        response = requests.post(
            f"{_host()}/vectors/upsert", data=json.dumps(payload), headers=_headers(token)
        )
    except requests.RequestException as exc:
        raise RuntimeError(f"error sending request: {exc}") from exc
    _check(response)


def get_index_stats(token: str) -> IndexStats:
    """Fetch and decode the index statistics."""
    try:
        response = requests.get(f"{_host()}/describe_index_stats", headers=_headers(token))
    except requests.RequestException as exc:
        raise RuntimeError(f"error sending request: {exc}") from exc
    _check(response)
    try:
        return IndexStats.from_dict(json.loads(response.content))
    except (ValueError, TypeError, AttributeError) as exc:
        raise RuntimeError(f"error decoding response: {exc}") from exc


def _chunks(items: Sequence[DocumentRecord], size: int) -> Iterator[tuple[int, Sequence[DocumentRecord]]]:
    for start in range(0, len(items), size):
        yield start, items[start : start + size]


def main(argv: list[str] | None = None) -> int:
    """Upload the documentation found under ``--path`` in batches."""
    token = os.environ.get(TOKEN_ENV, "")
    if not token:
        print(f"Error: {TOKEN_ENV} environment variable is not set")
        return 1

    parser = argparse.ArgumentParser(
        prog="vibes-upload", description="Upsert markdown documentation into a vector index."
    )
    parser.add_argument("-path", "--path", dest="path", default="../docs",
                        help="Path to the markdown documentation files")
    parser.add_argument("-namespace", "--namespace", dest="namespace", default="docs-namespace",
                        help="Namespace to use in the index")
    parser.add_argument("-chunk-size", "--chunk-size", dest="chunk_size", type=int, default=10,
                        help="Maximum number of records to send in a single batch")
    args = parser.parse_args(argv)
    if args.chunk_size < 1:
        parser.error("chunk size must be at least 1")

    if not os.path.exists(args.path):
        print(f"Error: The specified path '{args.path}' does not exist")
        return 1

    try:
        documents = process_markdown_files(args.path)
    except RuntimeError as exc:
        print(f"Error processing markdown files: {exc}")
        return 1

    if not documents:
        print("No markdown files found to process")
        return 0

    total = len(documents)
    print(f"Found {total} markdown files to process")

    for start, chunk in _chunks(documents, args.chunk_size):
        print(f"Processing chunk {start + 1} to {start + len(chunk)} of {total} documents")
        embeddings = get_embeddings([doc.content for doc in chunk])
        records = [
            Record(id=doc.id, values=embedding, metadata=doc.metadata)
            for doc, embedding in zip(chunk, embeddings)
        ]
        try:
            upsert_records(records, args.namespace, token)
        except RuntimeError as exc:
            print(f"Error upserting records: {exc}")
            return 1
        print(f"Successfully upserted {len(records)} records")
        time.sleep(1)

    print("All records upserted successfully")
    time.sleep(5)

    try:
        stats = get_index_stats(token)
    except RuntimeError as exc:
        print(f"Error getting index stats: {exc}")
        return 1
    print(f"Index stats: {stats}")
    return 0


if __name__ == "__main__":
    sys.exit(main())