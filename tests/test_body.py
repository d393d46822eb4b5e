import pytest

from missive.body import (
    Body,
    BodyEncodingError,
    choose_encoding,
    crlf_line_endings,
    encode_base64,
    encode_quoted_printable,
)
from missive.content import ContentTransferEncoding

HELLO_QP = (
    "Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, wor=\r\n"
    "ld!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, =\r\n"
    "world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hell=\r\n"
    "o, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!H=\r\n"
    "ello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, worl=\r\n"
    "d!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, w=\r\n"
    "orld!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello=\r\n"
    ", world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!He=\r\n"
    "llo, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world=\r\n"
    "!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, wo=\r\n"
    "rld!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello,=\r\n"
    " world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hel=\r\n"
    "lo, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!=\r\n"
    "Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, wor=\r\n"
    "ld!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, =\r\n"
    "world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!Hell=\r\n"
    "o, world!Hello, world!Hello, world!Hello, world!Hello, world!Hello, world!H=\r\n"
    "ello, world!Hello, world!"
).encode()


def test_seven_bit_detect():
    encoded = Body.encode("Hello, world!")
    assert encoded.encoding is ContentTransferEncoding.SEVEN_BIT
    assert bytes(encoded) == b"Hello, world!"


def test_seven_bit_encode():
    encoded = Body.with_encoding("Hello, world!", ContentTransferEncoding.SEVEN_BIT)
    assert encoded.encoding is ContentTransferEncoding.SEVEN_BIT
    assert bytes(encoded) == b"Hello, world!"


def test_seven_bit_too_long_detect():
    encoded = Body.encode("Hello, world!" * 100)
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == HELLO_QP


def test_seven_bit_too_long_fail():
    with pytest.raises(BodyEncodingError):
        Body.with_encoding("Hello, world!" * 100, ContentTransferEncoding.SEVEN_BIT)


def test_seven_bit_too_long_encode_quotedprintable():
    encoded = Body.with_encoding(
        "Hello, world!" * 100, ContentTransferEncoding.QUOTED_PRINTABLE
    )
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == HELLO_QP


def test_seven_bit_invalid():
    with pytest.raises(BodyEncodingError) as info:
        Body.with_encoding("Привет, мир!", ContentTransferEncoding.SEVEN_BIT)
    assert info.value.data == "Привет, мир!".encode("utf-8")
    assert info.value.encoding is ContentTransferEncoding.SEVEN_BIT


def test_eight_bit_encode():
    encoded = Body.with_encoding("Привет, мир!", ContentTransferEncoding.EIGHT_BIT)
    assert encoded.encoding is ContentTransferEncoding.EIGHT_BIT
    assert bytes(encoded) == "Привет, мир!".encode("utf-8")


def test_eight_bit_too_long_fail():
    with pytest.raises(BodyEncodingError):
        Body.with_encoding("Привет, мир!" * 200, ContentTransferEncoding.EIGHT_BIT)


def test_quoted_printable_detect():
    encoded = Body.encode("Questo messaggio è corto")
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == b"Questo messaggio =C3=A8 corto"


def test_quoted_printable_encode_ascii():
    encoded = Body.with_encoding(
        "Hello, world!", ContentTransferEncoding.QUOTED_PRINTABLE
    )
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == b"Hello, world!"


def test_quoted_printable_encode_utf8():
    encoded = Body.with_encoding(
        "Привет, мир!", ContentTransferEncoding.QUOTED_PRINTABLE
    )
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == b"=D0=9F=D1=80=D0=B8=D0=B2=D0=B5=D1=82, =D0=BC=D0=B8=D1=80!"


def test_quoted_printable_encode_line_wrap():
    encoded = Body.encode(
        "Se lo standard 📬 fosse stato più semplice avremmo finito molto prima."
    )
    assert encoded.encoding is ContentTransferEncoding.QUOTED_PRINTABLE
    assert bytes(encoded) == (
        "Se lo standard =F0=9F=93=AC fosse stato pi=C3=B9 semplice avremmo finito mo=\r\n"
        "lto prima."
    ).encode()


def test_base64_detect():
    assert Body.encode(bytes(80)).encoding is ContentTransferEncoding.BASE64


def test_base64_encode_bytes():
    encoded = Body.with_encoding(bytes(80), ContentTransferEncoding.BASE64)
    assert encoded.encoding is ContentTransferEncoding.BASE64
    assert bytes(encoded) == (
        "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA\r\n"
        "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA="
    ).encode()


def test_base64_encode_bytes_wrapping():
    encoded = Body.with_encoding(
        bytes(range(10)) * 20, ContentTransferEncoding.BASE64
    )
    assert encoded.encoding is ContentTransferEncoding.BASE64
    assert bytes(encoded) == (
        "AAECAwQFBgcICQABAgMEBQYHCAkAAQIDBAUGBwgJAAECAwQFBgcICQABAgMEBQYHCAkAAQIDBAUG\r\n"
        "BwgJAAECAwQFBgcICQABAgMEBQYHCAkAAQIDBAUGBwgJAAECAwQFBgcICQABAgMEBQYHCAkAAQID\r\n"
        "BAUGBwgJAAECAwQFBgcICQABAgMEBQYHCAkAAQIDBAUGBwgJAAECAwQFBgcICQABAgMEBQYHCAkA\r\n"
        "AQIDBAUGBwgJAAECAwQFBgcICQABAgMEBQYHCAk="
    ).encode()


def test_base64_encode_ascii():
    encoded = Body.with_encoding("Hello World!", ContentTransferEncoding.BASE64)
    assert encoded.encoding is ContentTransferEncoding.BASE64
    assert bytes(encoded) == b"SGVsbG8gV29ybGQh"


def test_base64_encode_ascii_wrapping():
    encoded = Body.with_encoding("Hello World!" * 20, ContentTransferEncoding.BASE64)
    assert encoded.encoding is ContentTransferEncoding.BASE64
    assert bytes(encoded) == (
        "SGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29y\r\n"
        "bGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8g\r\n"
        "V29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVs\r\n"
        "bG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQhSGVsbG8gV29ybGQh\r\n"
        "SGVsbG8gV29ybGQh"
    ).encode()


def test_crlf():
    assert (
        crlf_line_endings("Send me a ✉️\nwith\nlettre!\n😀")
        == "Send me a ✉️\r\nwith\r\nlettre!\r\n😀"
    )


def test_harsh_crlf():
    assert (
        crlf_line_endings("\n\nSend me a ✉️\r\n\nwith\n\nlettre!\n\r\n😀")
        == "\r\n\r\nSend me a ✉️\r\n\r\nwith\r\n\r\nlettre!\r\n\r\n😀"
    )


def test_crlf_noop():
    text = "\r\nSend me a ✉️\r\nwith\r\nlettre!\r\n😀"
    assert crlf_line_endings(text) == text


def test_text_body_gets_crlf_line_endings():
    encoded = Body.encode("first\nsecond")
    assert encoded.encoding is ContentTransferEncoding.SEVEN_BIT
    assert bytes(encoded) == b"first\r\nsecond"


def test_binary_body_keeps_line_feeds():
    encoded = Body.with_encoding(b"a\nb", ContentTransferEncoding.BINARY)
    assert bytes(encoded) == b"a\nb"


def test_empty_body():
    encoded = Body.encode("")
    assert len(encoded) == 0
    assert encoded.encoding is ContentTransferEncoding.SEVEN_BIT


def test_len_matches_buffer():
    encoded = Body.encode("Hello, world!")
    assert len(encoded) == 13


def test_pre_encoded_is_kept_as_given():
    body = Body.pre_encoded(b"SGk=", ContentTransferEncoding.BASE64)
    assert bytes(body) == b"SGk="
    assert body.encoding is ContentTransferEncoding.BASE64


def test_choose_encoding_bytes_is_base64():
    assert choose_encoding(b"plain", False) is ContentTransferEncoding.BASE64


def test_choose_encoding_utf8_supported():
    assert choose_encoding("Привет", True) is ContentTransferEncoding.EIGHT_BIT
    assert choose_encoding("Привет", False) is not ContentTransferEncoding.EIGHT_BIT


def test_choose_encoding_rejects_other_types():
    with pytest.raises(TypeError):
        choose_encoding(42, False)


def test_quoted_printable_keeps_hard_breaks_and_encodes_trailing_space():
    assert encode_quoted_printable(b"a \r\nb") == b"a=20\r\nb"


def test_quoted_printable_encodes_equals_sign():
    assert encode_quoted_printable(b"a=b") == b"a=3Db"


def test_quoted_printable_lines_fit():
    encoded = encode_quoted_printable(("è" * 200).encode("utf-8"))
    assert all(len(line) <= 76 for line in encoded.split(b"\r\n"))


def test_base64_round_trip():
    import base64

    data = bytes(range(256))
    encoded = encode_base64(data)
    assert all(len(line) <= 76 for line in encoded.split(b"\r\n"))
    assert base64.b64decode(encoded.replace(b"\r\n", b"")) == data


def test_base64_empty():
    assert encode_base64(b"") == b""