from flask import Blueprint, current_app

from mongo import *
from mongo import engine
from .auth import *
from .utils import *

__all__ = ['run_api']

run_api = Blueprint('run_api', __name__)


@run_api.route('/', methods=['POST'])
@login_required
@Request.json(
    'problem_alias: str',
    'language: str',
    'source: str',
    'contest_alias',
)
def create_run(user, problem_alias, language, source, contest_alias):
    problem = Problem(problem_alias)
    if not problem:
        return HTTPError(f'{problem} not found.', 404)
    contest = None
    if contest_alias is not None:
        contest = Contest(contest_alias)
        if not contest:
            return HTTPError(f'{contest} not found.', 404)
    try:
        run = Run.add(
            user=user,
            problem=problem,
            contest=contest,
            language=language,
            source=source,
            grader=current_app.extensions['grader'],
        )
    except SubmissionGapError as e:
        return HTTPError(str(e), 429, data={'wait': e.wait})
    except ValueError as e:
        return HTTPError(str(e), 400)
    except engine.ValidationError as e:
        return HTTPError('Invalid parameter', 400, data=e.to_dict())
    except PermissionError as e:
        return HTTPError(str(e), 403)
    except engine.DoesNotExist as e:
        return HTTPError(str(e), 404)
    return HTTPResponse('Success.', data=run.to_dict())


@run_api.route('/<run>', methods=['GET'])
@login_required
@Request.doc('run', Run)
def get_run(user, run: Run):
    if run.user.username != user.username and user.role != Role.ADMIN:
        return HTTPError('Forbidden.', 403)
    return HTTPResponse('Success.', data=run.to_dict())
