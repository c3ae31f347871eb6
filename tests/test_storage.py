import io
import os
from werkzeug.datastructures import FileStorage
from petclinic.utils.storage import RecordStorage


def test_build_filename_prefixes_pet_and_timestamp(tmp_path):
    storage = RecordStorage(str(tmp_path))
    assert storage.build_filename(3, 'xray.png', timestamp=1700000000.9) == '3_1700000000_xray.png'


def test_build_filename_strips_path_components(tmp_path):
    storage = RecordStorage(str(tmp_path))
    name = storage.build_filename(3, '../../etc/passwd', timestamp=1)
    assert name == '3_1_etc_passwd'
    assert os.sep not in name


def test_build_filename_falls_back_when_nothing_survives(tmp_path):
    storage = RecordStorage(str(tmp_path))
    assert storage.build_filename(3, '../..', timestamp=1) == '3_1_upload'


def test_save_writes_inside_upload_dir(tmp_path):
    storage = RecordStorage(str(tmp_path / 'uploads'))
    storage.ensure_dir()
    file = FileStorage(stream=io.BytesIO(b'data'), filename='scan.pdf')

    path = storage.save(file, 5)

    assert os.path.dirname(path) == storage.upload_dir
    assert os.path.basename(path).startswith('5_')
    with open(path, 'rb') as f:
        assert f.read() == b'data'


def test_discard_missing_file_returns_false(tmp_path):
    storage = RecordStorage(str(tmp_path))
    assert storage.discard(str(tmp_path / 'nope.txt')) is False


def test_sweep_orphans_keeps_referenced_files(tmp_path):
    storage = RecordStorage(str(tmp_path))
    kept = tmp_path / 'kept.txt'
    orphan = tmp_path / 'orphan.txt'
    kept.write_text('a')
    orphan.write_text('b')

    removed = storage.sweep_orphans([str(kept)])

    assert removed == [str(orphan)]
    assert kept.exists()
    assert not orphan.exists()


def test_sweep_orphans_dry_run_deletes_nothing(tmp_path):
    storage = RecordStorage(str(tmp_path))
    orphan = tmp_path / 'orphan.txt'
    orphan.write_text('b')

    assert storage.sweep_orphans([], dry_run=True) == [str(orphan)]
    assert orphan.exists()


def test_sweep_orphans_without_upload_dir(tmp_path):
    storage = RecordStorage(str(tmp_path / 'missing'))
    assert storage.sweep_orphans([]) == []
