import socket

import pytest

# Key derivation never touches the network, fail loudly if a test tries to
# https://www.tonylykke.com/posts/2018/07/31/disabling-the-internet-for-pytest/


def guard(*args, **kwargs):
    raise Exception("Unit test tried to open a socket")


@pytest.fixture(autouse=True, scope="session")
def no_sockets():
    # patched after collection, ssl subclasses the real socket class on import
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(socket, "socket", guard)
        yield
