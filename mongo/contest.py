from __future__ import annotations
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from . import engine
from .base import MongoBase
from .user import User, Role
from .problem import Problem
from .utils import from_timestamp, to_timestamp

__all__ = ['Contest']


class Contest(MongoBase, engine=engine.Contest):

    @classmethod
    def add_contest(
        cls,
        director: User,
        title: str,
        alias: str,
        start_time: int,
        finish_time: int,
        description: str = '',
        window_length: Optional[int] = None,
        public: bool = False,
        points_decay_factor: float = 0,
        partial_score: bool = True,
        submissions_gap: int = 60,
        feedback: str = 'yes',
        penalty: int = 0,
        scoreboard: int = 100,
        penalty_time_start: str = 'contest',
        penalty_calc_policy: str = 'sum',
    ) -> Contest:
        '''
        Create a contest. `start_time` and `finish_time` are unix timestamps.

        Raises `ValueError` on invalid settings and `NotUniqueError` if the
        alias is taken.
        '''
        if director.role not in (Role.ADMIN, Role.TEACHER):
            raise PermissionError('Only teachers can create contests')
        if re.match(r'^[a-zA-Z0-9_\-]{1,32}$', alias) is None:
            raise ValueError(f'Invalid alias [alias={alias}]')
        if not title:
            raise ValueError('Title is required')
        if finish_time <= start_time:
            raise ValueError('Finish time must be later than start time')
        if window_length is not None and window_length <= 0:
            raise ValueError('Window length must be positive')
        if not 0 <= points_decay_factor <= 1:
            raise ValueError('Points decay factor must be in [0, 1]')
        if not 0 <= scoreboard <= 100:
            raise ValueError('Scoreboard must be in [0, 100]')
        if not 0 <= submissions_gap <= finish_time - start_time:
            raise ValueError('Submissions gap out of range')
        if penalty < 0:
            raise ValueError('Penalty must not be negative')
        if feedback not in engine.Contest.FEEDBACKS:
            raise ValueError(f'Invalid feedback [feedback={feedback}]')
        if penalty_time_start not in engine.Contest.PENALTY_TIME_STARTS:
            raise ValueError(
                f'Invalid penalty time start [value={penalty_time_start}]')
        if penalty_calc_policy not in engine.Contest.PENALTY_CALC_POLICIES:
            raise ValueError(
                f'Invalid penalty calc policy [value={penalty_calc_policy}]')
        # HACK: mongomock does not enforce primary key uniqueness on save
        if cls(alias):
            raise engine.NotUniqueError('Contest')
        contest = cls.engine(
            alias=alias,
            title=title,
            description=description,
            start_time=from_timestamp(start_time),
            finish_time=from_timestamp(finish_time),
            window_length=window_length,
            public=bool(public),
            points_decay_factor=float(points_decay_factor),
            partial_score=bool(partial_score),
            submissions_gap=submissions_gap,
            feedback=feedback,
            penalty=penalty,
            scoreboard=scoreboard,
            penalty_time_start=penalty_time_start,
            penalty_calc_policy=penalty_calc_policy,
            director=director.obj,
        ).save(force_insert=True)
        contest = cls(contest)
        contest.logger.info(f'{contest} created by {director}')
        return contest

    @classmethod
    def search(cls, **filters) -> List[Contest]:
        return [cls(obj) for obj in cls.engine.objects(**filters)]

    def is_open(self, at: Optional[datetime] = None) -> bool:
        if at is None:
            at = datetime.utcnow()
        return self.start_time <= at <= self.finish_time

    def has_problem(self, problem: Problem) -> bool:
        return any(p.alias == problem.alias for p in self.problems)

    def add_problem(self, user: User, problem: Problem):
        if not self:
            raise engine.DoesNotExist(f'{self}')
        if not self.check_privilege(user):
            raise PermissionError
        if self.has_problem(problem):
            raise engine.NotUniqueError(f'{problem} already in {self}')
        self.update(push__problems=problem.obj)
        self.reload('problems')

    def check_privilege(self, user: User) -> bool:
        return any((
            user.role == Role.ADMIN,
            self.director.username == user.username,
        ))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'alias': self.alias,
            'title': self.title,
            'description': self.description,
            'startTime': to_timestamp(self.start_time),
            'finishTime': to_timestamp(self.finish_time),
            'windowLength': self.window_length,
            'public': self.public,
            'pointsDecayFactor': self.points_decay_factor,
            'partialScore': self.partial_score,
            'submissionsGap': self.submissions_gap,
            'feedback': self.feedback,
            'penalty': self.penalty,
            'scoreboard': self.scoreboard,
            'penaltyTimeStart': self.penalty_time_start,
            'penaltyCalcPolicy': self.penalty_calc_policy,
            'director': self.director.username,
            'problems': [p.alias for p in self.problems],
        }
