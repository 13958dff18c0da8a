from mpfs2.hashing import name_hash


def test_empty():
    assert name_hash('') == 0


def test_single_char():
    assert name_hash('A') == 65


def test_additive():
    for a, b in [('index', '.htm'), ('', 'x'), ('\uffff' * 3, 'css/style.css')]:
        assert name_hash(a + b) == (name_hash(a) + name_hash(b)) % 65536


def test_wraparound():
    assert name_hash('\uffff' + 'A') == 64
    assert name_hash('\uffff' * 2) == 0xfffe


def test_known_value():
    assert name_hash('index.htm') == 911


def test_bytes():
    assert name_hash(b'index.htm') == name_hash('index.htm')
    assert name_hash(b'\xff' * 0x102) == (0xff * 0x102) & 0xffff
