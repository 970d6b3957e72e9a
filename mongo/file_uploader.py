import abc
import logging
import os
import shutil

__all__ = ['UploadAdapter', 'FileUploader']

logger = logging.getLogger(__name__)


class UploadAdapter(abc.ABC):

    @abc.abstractmethod
    def is_uploaded_file(self, path: str) -> bool:
        ...

    @abc.abstractmethod
    def move_uploaded_file(self, src: str, dst: str) -> bool:
        ...


class FileUploader(UploadAdapter):
    '''
    Only files that came in through an upload (that is, files sitting in
    `upload_dir`) may be moved into permanent storage.
    '''

    def __init__(self, upload_dir: str):
        self.upload_dir = os.path.realpath(upload_dir)

    def is_uploaded_file(self, path: str) -> bool:
        path = os.path.realpath(path)
        if not os.path.isfile(path):
            return False
        return os.path.commonpath([self.upload_dir, path]) == self.upload_dir

    def move_uploaded_file(self, src: str, dst: str) -> bool:
        if not self.is_uploaded_file(src):
            logger.warning(f'refuse to move non-uploaded file [src={src}]')
            return False
        os.makedirs(os.path.dirname(os.path.abspath(dst)), exist_ok=True)
        shutil.move(src, dst)
        return True
