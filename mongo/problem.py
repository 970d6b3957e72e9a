from __future__ import annotations
import os
import re
from typing import Any, Dict
from zipfile import ZipFile, BadZipFile

from . import engine
from .base import MongoBase
from .file_uploader import UploadAdapter
from .user import User, Role

__all__ = ['Problem']


def count_cases(path: str) -> int:
    '''
    Count test cases inside a problem zip.
    Every `cases/<name>.in` needs a `cases/<name>.out`.
    '''
    try:
        with ZipFile(path) as zf:
            names = set(zf.namelist())
    except BadZipFile:
        raise ValueError('Only accept zip file.')
    inputs = {
        n[len('cases/'):-len('.in')]
        for n in names if n.startswith('cases/') and n.endswith('.in')
    }
    outputs = {
        n[len('cases/'):-len('.out')]
        for n in names if n.startswith('cases/') and n.endswith('.out')
    }
    if inputs != outputs:
        missing = sorted(inputs ^ outputs)
        raise ValueError(f'Unpaired test cases: {missing}')
    if not inputs:
        raise ValueError('No test case found')
    return len(inputs)


class Problem(MongoBase, engine=engine.Problem):

    @classmethod
    def add(
        cls,
        author: User,
        title: str,
        alias: str,
        validator: str,
        contents_path: str,
        file_uploader: UploadAdapter,
        problems_dir: str,
        time_limit: int = 1000,
        memory_limit: int = 65536,
        source: str = '',
    ) -> Problem:
        '''
        Create a problem from an uploaded zip at `contents_path`.

        The zip is moved to `<problems_dir>/<alias>/contents.zip` through
        `file_uploader` before it is inspected.
        '''
        if author.role not in (Role.ADMIN, Role.TEACHER):
            raise PermissionError('Only teachers can create problems')
        if re.match(r'^[a-zA-Z0-9_\-]{1,32}$', alias) is None:
            raise ValueError(f'Invalid alias [alias={alias}]')
        if validator not in engine.Problem.VALIDATORS:
            raise ValueError(f'Invalid validator [validator={validator}]')
        if time_limit <= 0 or memory_limit <= 0:
            raise ValueError('Limits must be positive')
        if cls(alias):
            raise engine.NotUniqueError('Problem')
        if not file_uploader.is_uploaded_file(contents_path):
            raise ValueError('Problem contents were not uploaded')
        target = os.path.join(problems_dir, alias, 'contents.zip')
        if not file_uploader.move_uploaded_file(contents_path, target):
            raise ValueError('Failed to store problem contents')
        try:
            case_count = count_cases(target)
            problem = cls.engine(
                alias=alias,
                title=title,
                author=author.obj,
                validator=validator,
                time_limit=time_limit,
                memory_limit=memory_limit,
                source=source,
                case_count=case_count,
                contents_path=target,
            ).save(force_insert=True)
        except (ValueError, engine.ValidationError):
            os.remove(target)
            raise
        problem = cls(problem)
        problem.logger.info(
            f'{problem} created by {author} [cases={case_count}]')
        return problem

    def check_privilege(self, user: User) -> bool:
        return any((
            user.role == Role.ADMIN,
            self.author.username == user.username,
        ))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'alias': self.alias,
            'title': self.title,
            'author': self.author.username,
            'validator': self.validator,
            'timeLimit': self.time_limit,
            'memoryLimit': self.memory_limit,
            'source': self.source,
            'caseCount': self.case_count,
        }
