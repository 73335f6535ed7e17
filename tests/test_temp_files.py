from app.services.temp_files import AudioArtifact, cleanup_files, generate_prefix


def test_prefixes_are_unique():
    prefixes = {generate_prefix() for _ in range(1000)}
    assert len(prefixes) == 1000


def test_cleanup_removes_only_matching_files(tmp_path):
    (tmp_path / "abc.mp3").write_bytes(b"a")
    (tmp_path / "abc.webm.part").write_bytes(b"b")
    (tmp_path / "other.mp3").write_bytes(b"c")

    assert cleanup_files(tmp_path, "abc") == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == ["other.mp3"]


def test_cleanup_ignores_missing_directory(tmp_path):
    assert cleanup_files(tmp_path / "missing", "abc") == 0


def test_cleanup_with_empty_prefix_does_nothing(tmp_path):
    (tmp_path / "keep.mp3").write_bytes(b"a")
    assert cleanup_files(tmp_path, "") == 0
    assert (tmp_path / "keep.mp3").exists()


def test_artifact_is_removed_even_when_block_fails(tmp_path):
    audio = tmp_path / "xyz.mp3"
    audio.write_bytes(b"a")
    artifact = AudioArtifact(path=audio, prefix="xyz", directory=tmp_path)

    try:
        with artifact:
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert not audio.exists()
