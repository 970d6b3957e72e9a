import io
import pathlib
import pytest

from mongo import *
from mongo import engine
from tests import utils
from tests.base_tester import BaseTester
from tests.utils.problem import make_contents


def problem_form(alias='aplusb', contents=None, **ks):
    if contents is None:
        contents = make_contents()
    form = {
        'title': 'A + B',
        'alias': alias,
        'validator': 'token-numeric',
        'timeLimit': '2000',
        'memoryLimit': '32768',
        'source': 'folklore',
        'problemContents': (io.BytesIO(contents), 'contents.zip'),
    }
    form.update(ks)
    return form


class TestCreateProblem(BaseTester):

    def test_create_problem(self, app, client_admin):
        uploader = self.create_file_uploader_mock()
        rv, rv_json, rv_data = self.request(
            client_admin,
            'post',
            '/problem',
            data=problem_form(),
        )
        assert rv.status_code == 200, rv_json
        assert rv_data['caseCount'] == 2
        assert rv_data['timeLimit'] == 2000
        assert rv_data['memoryLimit'] == 32768
        problem = Problem('aplusb')
        assert problem.validator == 'token-numeric'
        assert problem.author.username == 'first_admin'
        # the upload went through the adapter
        assert len(uploader.checked) == 1
        assert len(uploader.moved) == 1
        src, dst = uploader.moved[0]
        assert src == uploader.checked[0]
        target = pathlib.Path(app.config['PROBLEMS_DIR'], 'aplusb',
                              'contents.zip')
        assert dst == str(target)
        assert target.read_bytes() == make_contents()
        # temporary upload is cleaned
        assert not pathlib.Path(src).exists()

    def test_teacher_can_create_problem(self, forge_client):
        self.create_file_uploader_mock()
        utils.user.create_user(username='teacher', role=Role.TEACHER)
        client = forge_client('teacher')
        rv = client.post('/problem', data=problem_form())
        assert rv.status_code == 200, rv.get_json()

    def test_student_cannot_create_problem(self, forge_client):
        uploader = self.create_file_uploader_mock()
        utils.user.create_user(username='student')
        client = forge_client('student')
        rv = client.post('/problem', data=problem_form())
        assert rv.status_code == 403, rv.get_json()
        assert uploader.moved == []

    def test_unpaired_cases(self, app, client_admin):
        self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(contents=make_contents(unpaired=True)),
        )
        assert rv.status_code == 400, rv.get_json()
        assert 'Unpaired' in rv.get_json()['message']
        assert not Problem('aplusb')
        target = pathlib.Path(app.config['PROBLEMS_DIR'], 'aplusb',
                              'contents.zip')
        assert not target.exists()

    @pytest.mark.parametrize('field', ('title', 'source'))
    def test_overlong_field(self, app, client_admin, field):
        self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(**{field: 'x' * 300}),
        )
        assert rv.status_code == 400, rv.get_json()
        assert field in rv.get_json()['data']
        assert not Problem('aplusb')
        target = pathlib.Path(app.config['PROBLEMS_DIR'], 'aplusb',
                              'contents.zip')
        assert not target.exists()

    def test_no_case(self, client_admin):
        self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(contents=make_contents(case_count=0)),
        )
        assert rv.status_code == 400, rv.get_json()
        assert rv.get_json()['message'] == 'No test case found'

    def test_not_a_zip(self, client_admin):
        self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(contents=b'definitely not a zip'),
        )
        assert rv.status_code == 400, rv.get_json()
        assert rv.get_json()['message'] == 'Only accept zip file.'

    def test_missing_contents(self, client_admin):
        self.create_file_uploader_mock()
        form = problem_form()
        del form['problemContents']
        rv = client_admin.post('/problem', data=form)
        assert rv.status_code == 400, rv.get_json()

    def test_invalid_validator(self, client_admin):
        uploader = self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(validator='eyeball'),
        )
        assert rv.status_code == 400, rv.get_json()
        assert uploader.moved == []

    def test_invalid_time_limit(self, client_admin):
        self.create_file_uploader_mock()
        rv = client_admin.post(
            '/problem',
            data=problem_form(timeLimit='fast'),
        )
        assert rv.status_code == 400, rv.get_json()

    def test_duplicated_alias(self, client_admin):
        self.create_file_uploader_mock()
        rv = client_admin.post('/problem', data=problem_form())
        assert rv.status_code == 200, rv.get_json()
        rv = client_admin.post('/problem', data=problem_form())
        assert rv.status_code == 400, rv.get_json()
        assert rv.get_json()['message'] == 'Problem exists.'

    def test_upload_refused_by_adapter(self, app, client_admin):
        # a real uploader that only trusts a directory nothing is saved to
        app.extensions['file_uploader'] = FileUploader(
            str(pathlib.Path(app.config['UPLOAD_TMP_DIR']) / 'elsewhere'))
        rv = client_admin.post('/problem', data=problem_form())
        assert rv.status_code == 400, rv.get_json()
        assert rv.get_json()['message'] == 'Problem contents were not uploaded'

    def test_real_uploader(self, app, client_admin):
        app.extensions['file_uploader'] = FileUploader(
            app.config['UPLOAD_TMP_DIR'])
        rv = client_admin.post('/problem', data=problem_form())
        assert rv.status_code == 200, rv.get_json()
        assert Problem('aplusb').case_count == 2


class TestRejudge(BaseTester):

    @pytest.fixture
    def problem(self, app, tmp_path):
        return utils.problem.create_problem(User('first_admin'), tmp_path)

    def test_rejudge(self, client_admin, problem):
        grader = self.detour_grader_calls(times=4)
        for _ in range(2):
            rv = client_admin.post(
                '/run',
                json={
                    'problemAlias': problem.alias,
                    'language': 'c',
                    'source': 'int main() {}',
                },
            )
            assert rv.status_code == 200, rv.get_json()
        # refuse everything from now on
        grader.return_value = False
        rv = client_admin.post(f'/problem/{problem.alias}/rejudge')
        assert rv.status_code == 200, rv.get_json()
        assert rv.get_json()['data']['accepted'] == 0
        assert all(r.status == 'new' for r in engine.Run.objects)

    def test_rejudge_counts_accepted(self, client_admin, problem):
        self.detour_grader_calls(times=4)
        for _ in range(2):
            client_admin.post(
                '/run',
                json={
                    'problemAlias': problem.alias,
                    'language': 'py',
                    'source': 'print(1)',
                },
            )
        rv = client_admin.post(f'/problem/{problem.alias}/rejudge')
        assert rv.status_code == 200, rv.get_json()
        assert rv.get_json()['data']['accepted'] == 2
        assert all(r.status == 'waiting' for r in engine.Run.objects)

    def test_only_author_can_rejudge(self, forge_client, problem):
        self.detour_grader_calls(times=0)
        utils.user.create_user(username='student')
        client = forge_client('student')
        rv = client.post(f'/problem/{problem.alias}/rejudge')
        assert rv.status_code == 403, rv.get_json()

    def test_rejudge_missing_problem(self, client_admin):
        self.detour_grader_calls(times=0)
        rv = client_admin.post('/problem/ghost/rejudge')
        assert rv.status_code == 404, rv.get_json()
