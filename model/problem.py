import os
import tempfile
from flask import Blueprint, current_app

from mongo import *
from mongo import engine
from .auth import *
from .utils import *

__all__ = ['problem_api']

problem_api = Blueprint('problem_api', __name__)


def _save_upload(file_storage) -> str:
    '''
    put an incoming file into the upload directory, return its path
    '''
    upload_dir = current_app.config['UPLOAD_TMP_DIR']
    os.makedirs(upload_dir, exist_ok=True)
    fd, path = tempfile.mkstemp(prefix='upload-', dir=upload_dir)
    with os.fdopen(fd, 'wb') as f:
        file_storage.save(f)
    return path


@problem_api.route('/', methods=['POST'])
@identity_verify(Role.ADMIN, Role.TEACHER)
@Request.form(
    'title: str',
    'alias: str',
    'validator: str',
    'time_limit',
    'memory_limit',
    'source',
)
@Request.files('problem_contents')
def create_problem(
    user,
    title,
    alias,
    validator,
    time_limit,
    memory_limit,
    source,
    problem_contents,
):
    if problem_contents is None:
        return HTTPError('Problem contents are required.', 400)
    try:
        limits = {
            k: int(v)
            for k, v in (
                ('time_limit', time_limit),
                ('memory_limit', memory_limit),
            ) if v is not None
        }
    except ValueError:
        return HTTPError('Requested Value With Wrong Type', 400)
    contents_path = _save_upload(problem_contents)
    try:
        problem = Problem.add(
            author=user,
            title=title,
            alias=alias,
            validator=validator,
            contents_path=contents_path,
            file_uploader=current_app.extensions['file_uploader'],
            problems_dir=current_app.config['PROBLEMS_DIR'],
            source=source or '',
            **limits,
        )
    except ValueError as e:
        return HTTPError(str(e), 400)
    except engine.NotUniqueError:
        return HTTPError('Problem exists.', 400)
    except engine.ValidationError as e:
        return HTTPError('Invalid parameter', 400, data=e.to_dict())
    except PermissionError:
        return HTTPError('Forbidden.', 403)
    finally:
        # the adapter may have copied it instead of moving it
        if os.path.exists(contents_path):
            os.remove(contents_path)
    return HTTPResponse('Success.', data=problem.to_dict())


@problem_api.route('/<problem>', methods=['GET'])
@login_required
@Request.doc('problem', Problem)
def get_problem(user, problem: Problem):
    return HTTPResponse('Success.', data=problem.to_dict())


@problem_api.route('/<problem>/rejudge', methods=['POST'])
@login_required
@Request.doc('problem', Problem)
def rejudge_problem(user, problem: Problem):
    if not problem.check_privilege(user):
        return HTTPError('Forbidden.', 403)
    accepted = Run.rejudge(problem, current_app.extensions['grader'])
    current_app.logger.info(f'rejudge {problem} [accepted={accepted}]')
    return HTTPResponse('Success.', data={'accepted': accepted})
