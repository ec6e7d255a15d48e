import pytest

from jsonwriter.binary import ByteContainer


def test_default_has_no_subtype():
    container = ByteContainer(b"\x01\x02")
    assert container.has_subtype() is False
    assert container.subtype() == (1 << 64) - 1


def test_constructor_with_subtype():
    container = ByteContainer([1, 2, 3], subtype=42)
    assert container.has_subtype() is True
    assert container.subtype() == 42
    assert bytes(container) == b"\x01\x02\x03"


def test_set_and_clear_subtype():
    container = ByteContainer(b"ab")
    container.set_subtype(7)
    assert container.subtype() == 7
    assert container.has_subtype()
    container.clear_subtype()
    assert not container.has_subtype()
    assert container.subtype() == (1 << 64) - 1


def test_zero_subtype_differs_from_no_subtype():
    assert ByteContainer(b"x", subtype=0) != ByteContainer(b"x")
    assert not (ByteContainer(b"x", subtype=0) == ByteContainer(b"x"))


def test_equality_compares_bytes_and_subtype():
    assert ByteContainer(b"abc", subtype=5) == ByteContainer(b"abc", subtype=5)
    assert ByteContainer(b"abc", subtype=5) != ByteContainer(b"abc", subtype=6)
    assert ByteContainer(b"abc") != ByteContainer(b"abd")
    assert ByteContainer(b"abc") == ByteContainer(b"abc")


def test_cleared_equals_never_set():
    container = ByteContainer(b"z", subtype=9)
    container.clear_subtype()
    assert container == ByteContainer(b"z")


def test_behaves_like_bytearray():
    container = ByteContainer(b"ab", subtype=1)
    container.append(0x63)
    assert bytes(container) == b"abc"
    assert len(container) == 3
    assert container.subtype() == 1


@pytest.mark.parametrize("bad", [-1, 1 << 64])
def test_subtype_out_of_range(bad):
    with pytest.raises(ValueError):
        ByteContainer(b"", subtype=bad)
    with pytest.raises(ValueError):
        ByteContainer(b"").set_subtype(bad)


def test_largest_subtype_accepted():
    container = ByteContainer(b"", subtype=(1 << 64) - 1)
    assert container.has_subtype()
    assert container.subtype() == (1 << 64) - 1


def test_unhashable():
    with pytest.raises(TypeError):
        hash(ByteContainer(b"a"))