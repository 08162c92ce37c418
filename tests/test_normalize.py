import json
from pathlib import Path

import pytest

from apidiff_lib.normalize import SchemaError, create_class, create_method, normalize_document, normalize_module

FIXTURES = Path(__file__).parent / 'fixtures'


def _method(name, return_type=None, signatures=None):
    sig = {}
    if return_type is not None:
        sig['return'] = {'type': return_type}
    return {'name': name, 'textRaw': f'`{name}()`', 'signatures': signatures if signatures is not None else [sig]}


def test_create_method_without_return_has_null_return_type():
    m = create_method({'name': 'readFile', 'textRaw': 'fs.readFile()', 'signatures': [{}]})
    assert m == {'name': 'readFile', 'signature': 'fs.readFile()', 'return_type': None}


@pytest.mark.parametrize("return_type", ['boolean', 'Promise', '{string|Buffer}'])
def test_create_method_keeps_declared_return_type(return_type):
    assert create_method(_method('x', return_type))['return_type'] == return_type


def test_create_method_return_without_type_is_null():
    raw = {'name': 'x', 'textRaw': 'x()', 'signatures': [{'return': {'name': 'return'}}]}
    assert create_method(raw)['return_type'] is None


@pytest.mark.parametrize("signatures", [[], [{}, {}]])
def test_create_method_rejects_wrong_signature_count(signatures):
    with pytest.raises(SchemaError):
        create_method(_method('x', signatures=signatures))


def test_create_class_without_methods_is_dropped():
    assert create_class({'name': 'fs.FSWatcher'}) is None
    assert create_class({'name': 'fs.FSWatcher', 'methods': []}) is None


def test_normalize_module_drops_classes_without_methods():
    node = {
        'name': 'fs',
        'classes': [
            {'name': 'fs.Dir', 'methods': [_method('closeSync')]},
            {'name': 'fs.FSWatcher'},
        ],
    }
    result = normalize_module(node)
    assert [c['name'] for c in result['classes']] == ['fs.Dir']
    assert result['classes'][0]['methods'][0]['name'] == 'closeSync'


def test_document_without_modules_is_skipped():
    assert normalize_document('addons', {'source': 'doc/api/addons.md'}) is None
    assert normalize_document('addons', {'modules': None}) is None


@pytest.mark.parametrize("modules", [[], [{'name': 'a'}, {'name': 'b'}]])
def test_document_must_wrap_exactly_one_module(modules):
    with pytest.raises(SchemaError):
        normalize_document('fs', {'modules': modules})


def test_minimal_document_end_to_end():
    document = {'modules': [{'name': 'fs', 'methods': [
        {'name': 'readFile', 'textRaw': 'fs.readFile()', 'signatures': [{}]},
    ]}]}
    assert normalize_document('fs', document) == {
        'name': 'fs',
        'methods': [{'name': 'readFile', 'signature': 'fs.readFile()', 'return_type': None}],
        'classes': [],
    }


def test_fixture_document_flattens_nested_modules():
    document = json.loads((FIXTURES / 'fs.json').read_text())
    result = normalize_document('fs', document)
    assert result['name'] == 'fs'
    assert [m['name'] for m in result['methods']] == ['access', 'existsSync', 'rm']
    assert result['methods'][1]['return_type'] == 'boolean'
    assert result['methods'][2]['return_type'] == 'Promise'
    assert [c['name'] for c in result['classes']] == ['fs.Dir']


def test_flattening_order_and_count():
    # N children, each with no own methods but M methods one level further down
    n, m = 3, 2
    children = []
    for i in range(n):
        grandchild = {'name': f'g{i}', 'methods': [_method(f'g{i}_{j}') for j in range(m)],
                      'classes': [{'name': f'G{i}', 'methods': [_method(f'G{i}.run')]}]}
        children.append({'name': f'c{i}', 'modules': [grandchild]})
    node = {'name': 'root', 'methods': [_method('own')], 'modules': children}

    result = normalize_module(node)
    assert len(result['methods']) == 1 + n * m
    assert [x['name'] for x in result['methods']] == ['own', 'g0_0', 'g0_1', 'g1_0', 'g1_1', 'g2_0', 'g2_1']
    assert [c['name'] for c in result['classes']] == ['G0', 'G1', 'G2']


def test_own_members_come_before_nested_at_every_level():
    node = {
        'name': 'root',
        'modules': [{
            'name': 'child',
            'methods': [_method('child_own')],
            'modules': [{'name': 'grandchild', 'methods': [_method('deep')]}],
        }, {
            'name': 'sibling',
            'methods': [_method('sibling_own')],
        }],
        'methods': [_method('root_own')],
    }
    assert [m['name'] for m in normalize_module(node)['methods']] == ['root_own', 'child_own', 'deep', 'sibling_own']


def test_failing_child_contributes_nothing(caplog):
    import logging
    logger = logging.getLogger('test-normalize')
    node = {
        'name': 'root',
        'methods': [_method('own')],
        'modules': [
            {'name': 'broken', 'methods': [None]},
            {'name': 'ok', 'methods': [_method('fine')]},
        ],
    }
    with caplog.at_level(logging.ERROR, logger='test-normalize'):
        result = normalize_module(node, logger=logger)
    assert [m['name'] for m in result['methods']] == ['own', 'fine']
    assert 'broken' in caplog.text


def test_schema_error_in_child_is_fatal():
    document = {'modules': [{
        'name': 'fs',
        'methods': [_method('ok')],
        'modules': [{'name': 'promises', 'methods': [_method('rm', signatures=[{}, {}])]}],
    }]}
    with pytest.raises(SchemaError):
        normalize_document('fs', document)
