ADMIN = {'username': 'admin_user', 'password': 'Adm1n!pass'}
MODERATOR = {'username': 'desk_mod', 'password': 'M0d!password'}


def rx(**overrides):
    """Minimal valid intake data."""
    data = {
        'patientName': 'A',
        'age': 30,
        'gender': 'Male',
        'department': 'OPD',
        'type': 'General',
    }
    data.update(overrides)
    return data
