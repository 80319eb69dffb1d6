"""Nox configuration."""

import nox                                       # pylint: disable=import-error


@nox.session(python=['3.9', '3.10', '3.11', '3.12'], reuse_venv=True)
def test(session):
    """Run the test suite."""
    session.install('-e', '.[test]')
    args = ['pytest', *session.posargs, '-n4', '-vv', '-x', 'tests']
    session.run(*args)


@nox.session(reuse_venv=True)
@nox.parametrize('tomlkit', ['0.12.5', 'latest'])
def tomlkit_compat(session, tomlkit):
    """Run the file format tests against the oldest and newest tomlkit."""
    session.install('-e', '.[test]')
    if tomlkit == 'latest':
        session.install('--upgrade', 'tomlkit')
    else:
        session.install(f'tomlkit=={tomlkit}')
    session.run(
        'pytest', *session.posargs, '-vv',
        'tests/test_load_save.py', 'tests/test_snippets.py')


@nox.session(reuse_venv=True)
def release(session):
    """Generate a release."""
    session.install('build')
    session.run('python', '-m', 'build')
