# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-21
# Description: test_generate_embeddings_cli.py
# -----------------------------------------------------------------------------
import pytest
from click.testing import CliRunner

from fakes import FakeEmbeddingModel
from cli.generate_embeddings import main
from config.Config import Config
from vectorstore.VectorIndex import VectorIndex


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_name in Config.ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.delenv("DENSE_LOG_FILE", raising=False)


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeEmbeddingModel(dimension=4)
    monkeypatch.setattr("cli.generate_embeddings.load_embedding_model", lambda cfg: model)
    return model


@pytest.fixture
def corpus(tmp_path):
    path = tmp_path / "arxiv_data.csv"
    path.write_text("titles,terms\n" + "".join(f"Title number {i},cs.LG\n" for i in range(20)), encoding="utf-8")
    return path


def test_missing_argument_prints_usage_and_exits_1():
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 1
    assert "Usage" in result.output


def test_generates_artifact_pair(tmp_path, corpus, fake_model):
    out_dir = tmp_path / "out"
    result = CliRunner().invoke(main, [str(corpus), "--out-dir", str(out_dir), "--batch-size", "3"])

    assert result.exit_code == 0, result.output
    index = VectorIndex.from_files(out_dir / "embeddings.bin", out_dir / "text_map.bin", "my_embedding")
    assert index.size() == 20
    assert index.text(7) == "Title number 7"


def test_column_name_and_row_cap(tmp_path, corpus, fake_model):
    out_dir = tmp_path / "out"
    result = CliRunner().invoke(
        main,
        [str(corpus), "--out-dir", str(out_dir), "--column", "terms", "--max-rows", "5", "--key", "k"],
    )

    assert result.exit_code == 0, result.output
    index = VectorIndex.from_files(out_dir / "embeddings.bin", out_dir / "text_map.bin", "k")
    assert [index.text(i) for i in range(index.size())] == ["cs.LG"] * 5


def test_unreadable_source_exits_1(tmp_path, fake_model):
    result = CliRunner().invoke(main, [str(tmp_path / "missing.csv"), "--out-dir", str(tmp_path / "out")])
    assert result.exit_code == 1
    assert not (tmp_path / "out").exists()


def test_inference_failure_exits_1_without_artifacts(tmp_path, corpus, monkeypatch):
    model = FakeEmbeddingModel(fail_on="Title number 11")
    monkeypatch.setattr("cli.generate_embeddings.load_embedding_model", lambda cfg: model)
    out_dir = tmp_path / "out"

    result = CliRunner().invoke(main, [str(corpus), "--out-dir", str(out_dir)])

    assert result.exit_code == 1
    assert not (out_dir / "embeddings.bin").exists()
    assert not (out_dir / "text_map.bin").exists()


def test_log_file_records_the_run(tmp_path, corpus, fake_model):
    log_file = tmp_path / "logs" / "embed.log"
    result = CliRunner().invoke(main, [str(corpus), "--out-dir", str(tmp_path / "out"), "--log-file", str(log_file)])

    assert result.exit_code == 0, result.output
    content = log_file.read_text(encoding="utf-8")
    assert "Starting to generate embeddings" in content
    assert "densesearch.embedding.EmbeddingGenerator.EmbeddingGenerator" in content
