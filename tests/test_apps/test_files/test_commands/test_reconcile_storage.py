"""Tests for reconcile_storage management command."""

from io import BytesIO, StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from server.apps.files.logic import catalog


def _run(*args):
    out = StringIO()
    call_command('reconcile_storage', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
def test_reconcile_storage_clean():
    """Test command on consistent stores."""
    output = _run('--grace-seconds', '0')

    assert 'Checked 0 keys, 0 anomalies' in output


@pytest.mark.django_db
def test_reconcile_storage_reports_without_repair(blob_store):
    """Test anomalies are listed but nothing changes by default."""
    catalog.insert('alice', 'a.txt', 'text/plain', 5)
    blob_store.write('bob', 'orphan.txt', BytesIO(b'hello'))

    output = _run('--grace-seconds', '0')

    assert 'missing_blob: alice/a.txt' in output
    assert 'orphan_blob: bob/orphan.txt' in output
    assert '2 anomalies, 0 repaired' in output
    assert catalog.exists('alice', 'a.txt')
    assert blob_store.exists('bob', 'orphan.txt')


@pytest.mark.django_db
def test_reconcile_storage_repair(blob_store):
    """Test --repair fixes the anomalies."""
    catalog.insert('alice', 'a.txt', 'text/plain', 5)
    blob_store.write('bob', 'orphan.txt', BytesIO(b'hello'))

    output = _run('--grace-seconds', '0', '--repair')

    assert '[repaired]' in output
    assert '2 anomalies, 2 repaired' in output
    assert not catalog.exists('alice', 'a.txt')
    assert not blob_store.exists('bob', 'orphan.txt')


@pytest.mark.django_db
def test_reconcile_storage_default_grace(blob_store):
    """Test fresh anomalies are skipped with the default grace period."""
    catalog.insert('alice', 'a.txt', 'text/plain', 5)

    output = _run('--repair')

    assert '0 anomalies' in output
    assert '1 skipped' in output
    assert catalog.exists('alice', 'a.txt')


@pytest.mark.django_db
def test_reconcile_storage_owner_filter(blob_store):
    """Test --owner limits the pass."""
    catalog.insert('alice', 'a.txt', 'text/plain', 5)
    catalog.insert('bob', 'b.txt', 'text/plain', 5)

    output = _run('--grace-seconds', '0', '--owner', 'bob')

    assert 'bob/b.txt' in output
    assert 'alice/a.txt' not in output


def test_reconcile_storage_negative_grace():
    """Test a negative grace period is refused."""
    with pytest.raises(CommandError):
        _run('--grace-seconds', '-1')
