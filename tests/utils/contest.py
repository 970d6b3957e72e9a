import secrets
import time


def contest_request(**ks):
    '''
    a valid body for `POST /contest`, open from a minute ago for one hour
    '''
    now = int(time.time())
    alias = secrets.token_hex(6)
    r = {
        'title': f'Contest {alias}',
        'alias': alias,
        'description': 'Solve all of them',
        'start_time': now - 60,
        'finish_time': now + 3600,
        'window_length': None,
        'public': True,
        'points_decay_factor': 0.02,
        'partial_score': True,
        'submissions_gap': 60,
        'feedback': 'yes',
        'penalty': 20,
        'scoreboard': 100,
        'penalty_time_start': 'contest',
        'penalty_calc_policy': 'sum',
    }
    r.update(ks)
    return r
