from mongoengine import *
import mongoengine
import os
from enum import IntEnum
from datetime import datetime

__all__ = [*mongoengine.__all__]

MONGO_HOST = os.environ.get('MONGO_HOST', 'mongomock://localhost')

# FIXME: we should use config to check whether is in testing
if MONGO_HOST.startswith('mongomock'):
    import mongomock
    MONGO_HOST = MONGO_HOST.replace('mongomock', 'mongodb')
    connect(
        'contest-oj',
        host=MONGO_HOST,
        mongo_client_class=mongomock.MongoClient,
    )
else:
    connect('contest-oj', host=MONGO_HOST)


class IntEnumField(IntField):

    def __init__(self, enum: IntEnum, **ks):
        super().__init__(**ks)
        self.enum = enum

    def validate(self, value):
        choices = (*self.enum.__members__.values(), )
        if value not in choices:
            self.error(f'Value must be one of {choices}')


class User(Document):

    class Role(IntEnum):
        ADMIN = 0
        TEACHER = 1
        STUDENT = 2

    username = StringField(max_length=16, required=True, primary_key=True)
    user_id = StringField(db_field='userId', max_length=24, required=True)
    email = EmailField(required=True, unique=True, max_length=128)
    active = BooleanField(default=False)
    role = IntEnumField(default=Role.STUDENT, enum=Role)

    @property
    def info(self):
        return {
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }


class AuthToken(Document):
    meta = {
        'collection': 'auth_tokens',
        'indexes': [
            'user',
            '-create_time',
        ],
    }

    token = StringField(required=True, unique=True)
    user = ReferenceField('User', required=True, reverse_delete_rule=CASCADE)
    create_time = DateTimeField(
        db_field='createTime',
        required=True,
        default=datetime.utcnow,
    )
    last_access = DateTimeField(db_field='lastAccess', default=None)


class Problem(Document):

    VALIDATORS = [
        'token',
        'token-caseless',
        'token-numeric',
        'literal',
        'custom',
    ]

    alias = StringField(max_length=32, required=True, primary_key=True)
    title = StringField(max_length=256, required=True)
    author = ReferenceField('User', required=True)
    validator = StringField(required=True, choices=VALIDATORS)
    # in ms
    time_limit = IntField(db_field='timeLimit', min_value=1, default=1000)
    # in KB
    memory_limit = IntField(
        db_field='memoryLimit',
        min_value=1,
        default=65536,
    )
    source = StringField(max_length=256, default='')
    case_count = IntField(db_field='caseCount', default=0)
    contents_path = StringField(db_field='contentsPath', default='')
    create_time = DateTimeField(
        db_field='createTime',
        default=datetime.utcnow,
    )


class Contest(Document):

    FEEDBACKS = ['no', 'yes', 'partial']
    PENALTY_TIME_STARTS = ['none', 'problem', 'contest']
    PENALTY_CALC_POLICIES = ['sum', 'max']

    alias = StringField(max_length=32, required=True, primary_key=True)
    title = StringField(max_length=256, required=True)
    description = StringField(max_length=10000, default='')
    start_time = DateTimeField(db_field='startTime', required=True)
    finish_time = DateTimeField(db_field='finishTime', required=True)
    # in minutes, None means the whole contest
    window_length = IntField(db_field='windowLength', null=True, default=None)
    public = BooleanField(default=False)
    points_decay_factor = FloatField(
        db_field='pointsDecayFactor',
        min_value=0,
        max_value=1,
        default=0,
    )
    partial_score = BooleanField(db_field='partialScore', default=True)
    # in seconds
    submissions_gap = IntField(
        db_field='submissionsGap',
        min_value=0,
        default=60,
    )
    feedback = StringField(choices=FEEDBACKS, default='yes')
    penalty = IntField(min_value=0, default=0)
    # percentage of the contest during which the scoreboard is visible
    scoreboard = IntField(min_value=0, max_value=100, default=100)
    penalty_time_start = StringField(
        db_field='penaltyTimeStart',
        choices=PENALTY_TIME_STARTS,
        default='contest',
    )
    penalty_calc_policy = StringField(
        db_field='penaltyCalcPolicy',
        choices=PENALTY_CALC_POLICIES,
        default='sum',
    )
    director = ReferenceField('User', required=True)
    problems = ListField(ReferenceField('Problem'), default=list)


class Run(Document):

    LANGUAGES = ['c', 'cpp', 'java', 'py']
    STATUSES = ['new', 'waiting', 'compiling', 'running', 'ready']

    meta = {
        'indexes': [
            ('user', 'problem', '-submit_time'),
        ],
    }

    user = ReferenceField('User', required=True)
    problem = ReferenceField('Problem', required=True)
    contest = ReferenceField('Contest', null=True, default=None)
    language = StringField(required=True, choices=LANGUAGES)
    source = StringField(required=True, max_length=65536)
    status = StringField(choices=STATUSES, default='new')
    verdict = StringField(max_length=4, default='JE')
    score = FloatField(default=0)
    submit_time = DateTimeField(
        db_field='submitTime',
        default=datetime.utcnow,
    )
