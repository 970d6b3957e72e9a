import abc
import logging

import requests as rq
from flask import current_app

__all__ = ['GradingService', 'Grader']


class GradingService(abc.ABC):
    '''
    Anything that can take a run off our hands and judge it.
    '''

    @abc.abstractmethod
    def grade(self, run) -> bool:
        '''
        hand `run` to the grader, return whether it was accepted
        '''


class Grader(GradingService):
    '''
    Client of the external grading service.
    '''

    def __init__(self, url: str, timeout: float = 5):
        self.url = url.rstrip('/')
        self.timeout = timeout

    def __repr__(self):
        return f'<Grader {self.url}>'

    @property
    def logger(self) -> logging.Logger:
        try:
            return current_app.logger
        except RuntimeError:
            return logging.getLogger(__name__)

    def grade(self, run) -> bool:
        payload = {
            'runId': str(run.id),
            'problem': run.problem.alias,
            'language': run.language,
        }
        try:
            resp = rq.post(
                f'{self.url}/grade',
                json=payload,
                timeout=self.timeout,
            )
        except rq.exceptions.RequestException as e:
            self.logger.warning(f'grader {self.url} is unreachable: {e}')
            return False
        if resp.status_code != 200:
            self.logger.error(
                'can not handle response from grader\n'
                f'status code: {resp.status_code}\n'
                f'body: {resp.text}', )
            return False
        self.logger.info(f'run [{run.id}] sent to grader')
        return True
