from rxdesk.utils.sanitization import sanitize_object, sanitize_string
from rxdesk.utils.validation import (
    parse_positive_int,
    validate_aadhar,
    validate_mobile,
    validate_password,
    validate_username,
)


def test_sanitize_string_escapes_markup():
    assert sanitize_string('<b>"x"</b>') == '&lt;b&gt;&quot;x&quot;&lt;&#x2F;b&gt;'
    assert sanitize_string("it's `x`") == 'it&#39;s &#96;x&#96;'
    assert sanitize_string('') == ''


def test_sanitize_object_is_recursive():
    data = {
        'name': '<i>',
        'age': 30,
        'flag': True,
        'missing': None,
        'nested': {'tags': ['<a>', 1, {'deep': '"q"'}]},
    }
    assert sanitize_object(data) == {
        'name': '&lt;i&gt;',
        'age': 30,
        'flag': True,
        'missing': None,
        'nested': {'tags': ['&lt;a&gt;', 1, {'deep': '&quot;q&quot;'}]},
    }
    # input left untouched
    assert data['name'] == '<i>'


def test_sanitize_object_passes_scalars_through():
    assert sanitize_object('a/b') == 'a&#x2F;b'
    assert sanitize_object(None) is None
    assert sanitize_object(7) == 7


def test_username_policy():
    assert validate_username('desk_mod-1') is None
    assert validate_username('') == 'Username is required'
    assert validate_username('abc') == 'Username must be at least 4 characters long'
    assert validate_username('bad name') == 'Username can only contain letters, numbers, underscore and hyphen'
    assert validate_username('abcd\n') is not None
    assert validate_username(None) == 'Username is required'


def test_password_policy():
    assert validate_password('Adm1n!pass') is None
    assert validate_password('') == 'Password is required'
    assert validate_password('Ab1!') == 'Password must be at least 8 characters long'
    assert validate_password('adm1n!pass') == 'Password must contain at least one uppercase letter'
    assert validate_password('ADM1N!PASS') == 'Password must contain at least one lowercase letter'
    assert validate_password('Admin!pass') == 'Password must contain at least one number'
    assert validate_password('Adm1npass') == 'Password must contain at least one special character'
    assert validate_password('Aa1!' * 20) == 'Password must be at most 72 bytes long'


def test_aadhar_and_mobile_are_optional_but_exact():
    assert validate_aadhar(None) is None
    assert validate_aadhar('') is None
    assert validate_aadhar('123456789012') is None
    assert validate_aadhar(123456789012) is None
    assert validate_aadhar('12345') == 'Aadhar number must be exactly 12 digits'
    assert validate_aadhar('12345678901a') is not None
    assert validate_mobile('9876543210') is None
    assert validate_mobile('98765') == 'Mobile number must be exactly 10 digits'
    assert validate_mobile('98765432100') is not None


def test_parse_positive_int():
    assert parse_positive_int(30) == 30
    assert parse_positive_int('30') == 30
    assert parse_positive_int(' 7 ') == 7
    assert parse_positive_int(12.0) == 12
    assert parse_positive_int(12.5) is None
    assert parse_positive_int('0') is None
    assert parse_positive_int(-3) is None
    assert parse_positive_int('abc') is None
    assert parse_positive_int(True) is None
    assert parse_positive_int(None) is None
