import json
import os
from unittest import mock

import pytest
import responses

from vibes import uploader
from vibes.uploader import (
    DocumentRecord,
    IndexStats,
    NamespaceStats,
    Record,
    extract_title,
    get_embeddings,
    get_index_stats,
    process_markdown_files,
    upsert_records,
)

HOST = "https://vectors.example.com"


@pytest.fixture(autouse=True)
def _host(monkeypatch):
    monkeypatch.setenv("PINECONE_HOST", HOST)


@pytest.fixture
def docs(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.MD").write_text("---\ntitle: Alpha\n---\nbody\n", encoding="utf-8")
    (tmp_path / "sub" / "b.md").write_text("# Beta heading\ntext\n", encoding="utf-8")
    (tmp_path / "sub" / "plain.md").write_text("no title here\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("# Ignored\n", encoding="utf-8")
    return tmp_path


STATS = {
    "dimension": 1536,
    "index_fullness": 0.25,
    "namespaces": {"docs-namespace": {"vector_count": 3}},
    "total_vector_count": 3,
    "vector_type": "dense",
    "metric": "cosine",
}


def test_extract_title_from_front_matter():
    assert extract_title("---\ntitle: Hello World  \n---\n# Other\n") == "Hello World"


def test_extract_title_from_heading():
    assert extract_title("intro\n## Sub\n# Main Title \nmore") == "Main Title"


def test_extract_title_front_matter_without_title_uses_heading():
    assert extract_title("---\nauthor: x\n---\n# Fallback\n") == "Fallback"


def test_extract_title_empty_front_matter_is_ignored():
    assert extract_title("------\n# Head\n") == "Head"


def test_extract_title_none_found():
    assert extract_title("just text\n#nospace\n") == ""


def test_get_embeddings_shape_and_values():
    embeddings = get_embeddings(["one", "two", "three"])
    assert len(embeddings) == 3
    assert all(len(vector) == uploader.EMBEDDING_DIMENSION == 1536 for vector in embeddings)
    assert all(value == 0.01 for vector in embeddings for value in vector)
    assert get_embeddings([]) == []


def test_record_to_dict_omits_empty_fields():
    assert Record(id="x").to_dict() == {"id": "x"}
    full = Record(id="y", values=[0.5], metadata={"k": "v"}).to_dict()
    assert full == {"id": "y", "values": [0.5], "metadata": {"k": "v"}}


def test_process_markdown_files(docs):
    documents = process_markdown_files(docs)
    assert [doc.id for doc in documents] == ["a.MD", "sub-b.md", "sub-plain.md"]
    first, second, third = documents
    assert first.metadata == {"path": "a.MD", "title": "Alpha", "filename": "a.MD"}
    assert second.metadata == {
        "path": os.path.join("sub", "b.md"),
        "title": "Beta heading",
        "filename": "b.md",
    }
    assert third.metadata["title"] == "plain.md"
    assert second.content == "# Beta heading\ntext\n"


def test_process_markdown_files_missing_path(tmp_path):
    with pytest.raises(RuntimeError, match="error walking through directory"):
        process_markdown_files(tmp_path / "missing")


def test_upsert_records_sends_payload():
    records = [Record(id="doc", values=[0.01, 0.01], metadata={"title": "Doc"})]
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{HOST}/vectors/upsert", json={"upsertedCount": 1})
        result = upsert_records(records, "ns", "token")
        assert len(rsps.calls) == 1
        request = rsps.calls[0].request
    assert result is None
    assert request.headers["Api-Key"] == "token"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == {
        "vectors": [{"id": "doc", "values": [0.01, 0.01], "metadata": {"title": "Doc"}}],
        "namespace": "ns",
    }


def test_upsert_records_bad_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{HOST}/vectors/upsert", status=400, body="bad vectors")
        with pytest.raises(RuntimeError) as info:
            upsert_records([Record(id="a")], "ns", "token")
    assert str(info.value) == "unexpected status code: 400, response: bad vectors"


def test_get_index_stats_decodes():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{HOST}/describe_index_stats", json=STATS)
        stats = get_index_stats("token")
        assert rsps.calls[0].request.headers["Api-Key"] == "token"
    assert stats == IndexStats(
        dimension=1536,
        index_fullness=0.25,
        namespaces={"docs-namespace": NamespaceStats(vector_count=3)},
        total_vector_count=3,
        vector_type="dense",
        metric="cosine",
    )


def test_get_index_stats_bad_json():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{HOST}/describe_index_stats", body="not json")
        with pytest.raises(RuntimeError, match="error decoding response"):
            get_index_stats("token")


def test_get_index_stats_bad_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{HOST}/describe_index_stats", status=500, body="down")
        with pytest.raises(RuntimeError, match="unexpected status code: 500"):
            get_index_stats("token")


def test_document_record_defaults():
    doc = DocumentRecord(id="a", content="text")
    assert doc.metadata == {}
    assert doc.content == "text"


def test_main_without_token(monkeypatch, capsys):
    monkeypatch.delenv("PINECONE_API_KEY", raising=False)
    assert uploader.main([]) == 1
    assert "PINECONE_API_KEY environment variable is not set" in capsys.readouterr().out


def test_main_missing_path(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("PINECONE_API_KEY", "token")
    missing = tmp_path / "nowhere"
    assert uploader.main(["--path", str(missing)]) == 1
    assert f"'{missing}' does not exist" in capsys.readouterr().out


def test_main_no_markdown(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("PINECONE_API_KEY", "token")
    (tmp_path / "readme.txt").write_text("x", encoding="utf-8")
    assert uploader.main(["--path", str(tmp_path)]) == 0
    assert "No markdown files found to process" in capsys.readouterr().out


@mock.patch("time.sleep")
def test_main_uploads_in_chunks(sleep, monkeypatch, docs, capsys):
    monkeypatch.setenv("PINECONE_API_KEY", "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{HOST}/vectors/upsert", json={})
        rsps.add(responses.GET, f"{HOST}/describe_index_stats", json=STATS)
        code = uploader.main(["--path", str(docs), "--namespace", "ns", "--chunk-size", "2"])
        posts = [call for call in rsps.calls if call.request.method == "POST"]
        bodies = [json.loads(call.request.body) for call in posts]
    assert code == 0
    assert [len(body["vectors"]) for body in bodies] == [2, 1]
    assert all(body["namespace"] == "ns" for body in bodies)
    sent_ids = [vector["id"] for body in bodies for vector in body["vectors"]]
    assert sent_ids == [doc.id for doc in process_markdown_files(docs)]
    out = capsys.readouterr().out
    assert "Found 3 markdown files to process" in out
    assert "All records upserted successfully" in out
    assert sleep.call_count == 3


@mock.patch("time.sleep")
def test_main_reports_upsert_failure(sleep, monkeypatch, docs, capsys):
    monkeypatch.setenv("PINECONE_API_KEY", "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{HOST}/vectors/upsert", status=403, body="denied")
        code = uploader.main(["--path", str(docs)])
    assert code == 1
    assert "Error upserting records: unexpected status code: 403" in capsys.readouterr().out


def test_main_rejects_zero_chunk_size(monkeypatch, docs):
    monkeypatch.setenv("PINECONE_API_KEY", "token")
    with pytest.raises(SystemExit) as info:
        uploader.main(["--path", str(docs), "--chunk-size", "0"])
    assert info.value.code == 2