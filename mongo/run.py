from __future__ import annotations
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from . import engine
from .base import MongoBase
from .contest import Contest
from .grader import GradingService
from .problem import Problem
from .user import User

__all__ = ['Run', 'SubmissionGapError']


class SubmissionGapError(Exception):
    '''
    the user submitted to the same problem too soon
    '''

    def __init__(self, wait: int):
        super().__init__(f'Wait {wait} seconds before submitting again')
        self.wait = wait


class Run(MongoBase, engine=engine.Run):

    @classmethod
    def add(
        cls,
        user: User,
        problem: Problem,
        language: str,
        source: str,
        grader: GradingService,
        contest: Optional[Contest] = None,
    ) -> Run:
        if not problem:
            raise engine.DoesNotExist(f'{problem}')
        if language not in engine.Run.LANGUAGES:
            raise ValueError(f'Invalid language [language={language}]')
        now = datetime.utcnow()
        if contest is not None:
            if not contest:
                raise engine.DoesNotExist(f'{contest}')
            if not contest.is_open(now):
                raise PermissionError('Contest is not open')
            if not contest.has_problem(problem):
                raise engine.DoesNotExist(f'{problem} not in {contest}')
            last = engine.Run.objects(
                user=user.obj,
                problem=problem.obj,
                contest=contest.obj,
            ).order_by('-submit_time').first()
            if last is not None:
                gap = timedelta(seconds=contest.submissions_gap)
                if now - last.submit_time < gap:
                    wait = gap - (now - last.submit_time)
                    raise SubmissionGapError(int(wait.total_seconds()) + 1)
        run = cls(
            cls.engine(
                user=user.obj,
                problem=problem.obj,
                contest=contest.obj if contest is not None else None,
                language=language,
                source=source,
                submit_time=now,
            ).save())
        run.logger.debug(f'{run} created by {user}')
        run.send(grader)
        return run

    def send(self, grader: GradingService) -> bool:
        '''
        hand the run to `grader`; the run stays `new` if it is refused
        '''
        if grader.grade(self):
            self.update(status='waiting')
            self.reload('status')
            return True
        self.logger.error(f'grader refused {self}')
        return False

    @classmethod
    def rejudge(cls, problem: Problem, grader: GradingService) -> int:
        '''
        send every run of `problem` to `grader` again,
        return how many of them were accepted
        '''
        accepted = 0
        for obj in engine.Run.objects(problem=problem.obj):
            run = cls(obj)
            run.update(status='new', verdict='JE', score=0)
            run.reload()
            if run.send(grader):
                accepted += 1
        return accepted

    def to_dict(self) -> Dict[str, Any]:
        return {
            'runId': str(self.id),
            'username': self.user.username,
            'problem': self.problem.alias,
            'contest': self.contest.alias if self.contest else None,
            'language': self.language,
            'status': self.status,
            'verdict': self.verdict,
            'score': self.score,
        }
