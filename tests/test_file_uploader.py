import pytest

from mongo import *


@pytest.fixture
def upload_dir(tmp_path):
    d = tmp_path / 'upload'
    d.mkdir()
    return d


def test_uploaded_file(upload_dir):
    f = upload_dir / 'upload-1'
    f.write_bytes(b'content')
    assert FileUploader(str(upload_dir)).is_uploaded_file(str(f))


def test_file_outside_upload_dir(tmp_path, upload_dir):
    f = tmp_path / 'passwd'
    f.write_bytes(b'root:x:0:0')
    assert not FileUploader(str(upload_dir)).is_uploaded_file(str(f))


def test_escape_with_dotdot(tmp_path, upload_dir):
    f = tmp_path / 'secret'
    f.write_bytes(b'secret')
    path = upload_dir / '..' / 'secret'
    assert not FileUploader(str(upload_dir)).is_uploaded_file(str(path))


def test_missing_file(upload_dir):
    uploader = FileUploader(str(upload_dir))
    assert not uploader.is_uploaded_file(str(upload_dir / 'ghost'))


def test_directory_is_not_a_file(upload_dir):
    (upload_dir / 'dir').mkdir()
    uploader = FileUploader(str(upload_dir))
    assert not uploader.is_uploaded_file(str(upload_dir / 'dir'))


def test_move_uploaded_file(tmp_path, upload_dir):
    src = upload_dir / 'upload-1'
    src.write_bytes(b'content')
    dst = tmp_path / 'problems' / 'aplusb' / 'contents.zip'
    assert FileUploader(str(upload_dir)).move_uploaded_file(
        str(src), str(dst))
    assert not src.exists()
    assert dst.read_bytes() == b'content'


def test_refuse_to_move_other_file(tmp_path, upload_dir):
    src = tmp_path / 'passwd'
    src.write_bytes(b'root:x:0:0')
    dst = tmp_path / 'stolen'
    assert not FileUploader(str(upload_dir)).move_uploaded_file(
        str(src), str(dst))
    assert src.exists()
    assert not dst.exists()
