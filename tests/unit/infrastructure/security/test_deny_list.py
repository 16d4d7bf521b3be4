import asyncio
import logging
import pytest
import admin_api.infrastructure.security as security


@pytest.mark.asyncio
async def test_static_deny_list():
    deny_list = security.StaticDenyList(['password1', 'letmein'])
    assert 'letmein' in await deny_list.entries()
    assert 'buckaroo' not in await deny_list.entries()


@pytest.mark.asyncio
async def test_file_deny_list_reads_once(tmp_path, mocker):
    path = tmp_path / 'invalid_passwords.txt'
    path.write_text('password1\n\n  qwertyuiop  \n')
    deny_list = security.FileDenyList(path)
    to_thread = mocker.spy(asyncio, 'to_thread')

    assert set(await deny_list.entries()) == {'password1', 'qwertyuiop'}
    path.write_text('changed\n')
    assert set(await deny_list.entries()) == {'password1', 'qwertyuiop'}
    assert to_thread.call_count == 1


@pytest.mark.asyncio
async def test_file_deny_list_reload_reads_off_the_event_loop(tmp_path, mocker):
    path = tmp_path / 'invalid_passwords.txt'
    path.write_text('password1\n')
    deny_list = security.FileDenyList(path, reload=True)
    to_thread = mocker.spy(asyncio, 'to_thread')

    assert set(await deny_list.entries()) == {'password1'}
    path.write_text('changed\n')
    assert set(await deny_list.entries()) == {'changed'}
    assert to_thread.call_count == 2
    assert all(call.args[0] == deny_list._read for call in to_thread.call_args_list)


@pytest.mark.asyncio
async def test_missing_file_is_empty_and_logged(tmp_path, caplog):
    deny_list = security.FileDenyList(tmp_path / 'nope.txt')
    with caplog.at_level(logging.ERROR, logger='admin_api.security'):
        assert len(await deny_list.entries()) == 0
    assert 'nope.txt' in caplog.text
