from flask import Blueprint

from mongo import *
from mongo import engine
from .auth import *
from .utils import *

__all__ = ['contest_api']

contest_api = Blueprint('contest_api', __name__)


@contest_api.route('/', methods=['POST'])
@identity_verify(Role.ADMIN, Role.TEACHER)
@Request.json(
    'title: str',
    'alias: str',
    'start_time: int',
    'finish_time: int',
    'description',
    'window_length',
    'public',
    'points_decay_factor',
    'partial_score',
    'submissions_gap',
    'feedback',
    'penalty',
    'scoreboard',
    'penalty_time_start',
    'penalty_calc_policy',
)
def create_contest(user, **ks):
    # let the model fill in defaults for everything not given
    ks = {k: v for k, v in ks.items() if v is not None}
    try:
        contest = Contest.add_contest(user, **ks)
    except (ValueError, TypeError) as e:
        return HTTPError(str(e), 400)
    except NotUniqueError:
        return HTTPError('Contest exists.', 400)
    except ValidationError as e:
        return HTTPError('Invalid parameter', 400, data=e.to_dict())
    except PermissionError:
        return HTTPError('Forbidden.', 403)
    return HTTPResponse('Success.', data=contest.to_dict())


@contest_api.route('/<contest>', methods=['GET'])
@login_required
@Request.doc('contest', Contest)
def get_contest(user, contest: Contest):
    if not contest.public and not contest.check_privilege(user):
        return HTTPError('Forbidden.', 403)
    return HTTPResponse('Success.', data=contest.to_dict())


@contest_api.route('/<contest>/problem', methods=['POST'])
@login_required
@Request.json('problem_alias: str')
@Request.doc('contest', Contest)
def add_contest_problem(user, contest: Contest, problem_alias):
    problem = Problem(problem_alias)
    if not problem:
        return HTTPError(f'{problem} not found.', 404)
    try:
        contest.add_problem(user, problem)
    except PermissionError:
        return HTTPError('Forbidden.', 403)
    except engine.NotUniqueError:
        return HTTPError('Problem already in contest.', 400)
    return HTTPResponse('Success.', data=contest.to_dict())
