import pytest

from missive.content import (
    ContentDisposition,
    ContentTransferEncoding,
    ContentType,
    ContentTypeError,
)
from missive.headers import HeaderName, HeaderValue, Headers


def test_format_content_transfer_encoding():
    headers = Headers()
    headers.set(ContentTransferEncoding.SEVEN_BIT)
    assert str(headers) == "Content-Transfer-Encoding: 7bit\r\n"
    headers.set(ContentTransferEncoding.BASE64)
    assert str(headers) == "Content-Transfer-Encoding: base64\r\n"


def test_parse_content_transfer_encoding():
    headers = Headers()
    headers.insert_raw(HeaderValue(HeaderName("Content-Transfer-Encoding"), "7bit"))
    assert headers.get(ContentTransferEncoding) is ContentTransferEncoding.SEVEN_BIT
    headers.insert_raw(HeaderValue(HeaderName("Content-Transfer-Encoding"), "base64"))
    assert headers.get(ContentTransferEncoding) is ContentTransferEncoding.BASE64


@pytest.mark.parametrize(
    "text, encoding",
    [
        ("7bit", ContentTransferEncoding.SEVEN_BIT),
        ("quoted-printable", ContentTransferEncoding.QUOTED_PRINTABLE),
        ("base64", ContentTransferEncoding.BASE64),
        ("8bit", ContentTransferEncoding.EIGHT_BIT),
        ("binary", ContentTransferEncoding.BINARY),
    ],
)
def test_transfer_encoding_round_trip(text, encoding):
    assert ContentTransferEncoding.parse(text) is encoding
    assert str(encoding) == text


def test_transfer_encoding_invalid():
    with pytest.raises(ValueError):
        ContentTransferEncoding.parse("7BIT")


def test_format_content_disposition():
    headers = Headers()
    headers.set(ContentDisposition.inline())
    assert str(headers) == "Content-Disposition: inline\r\n"
    headers.set(ContentDisposition.attachment("something.txt"))
    assert str(headers) == 'Content-Disposition: attachment; filename="something.txt"\r\n'


def test_parse_content_disposition():
    headers = Headers()
    headers.insert_raw(HeaderValue(HeaderName("Content-Disposition"), "inline"))
    assert headers.get(ContentDisposition) == ContentDisposition.inline()
    headers.insert_raw(
        HeaderValue(
            HeaderName("Content-Disposition"), 'attachment; filename="something.txt"'
        )
    )
    assert headers.get(ContentDisposition) == ContentDisposition.attachment(
        "something.txt"
    )


def test_inline_with_name():
    value = ContentDisposition.inline_with_name("a.txt").display()
    assert value.raw_value == 'inline; filename="a.txt"'
    assert value.encoded_value == 'inline; filename="a.txt"'
    assert ContentDisposition.parse('inline; filename="a.txt"') == (
        ContentDisposition.inline_with_name("a.txt")
    )


def test_disposition_non_ascii_keeps_raw_value():
    value = ContentDisposition.attachment("résumé.pdf").display()
    assert value.raw_value == 'attachment; filename="résumé.pdf"'
    assert value.encoded_value.isascii()


@pytest.mark.parametrize(
    "text", ["attachment", "other; filename=\"a\"", 'attachment; filename="a', ""]
)
def test_disposition_unsupported(text):
    with pytest.raises(ValueError, match="Unsupported ContentDisposition value"):
        ContentDisposition.parse(text)


def test_disposition_get_unsupported_is_none():
    headers = Headers()
    headers.insert_raw(HeaderValue(HeaderName("Content-Disposition"), "bogus"))
    assert headers.get(ContentDisposition) is None


def test_format_content_type():
    headers = Headers()
    headers.set(ContentType.TEXT_PLAIN)
    assert str(headers) == "Content-Type: text/plain; charset=utf-8\r\n"
    headers.set(ContentType.TEXT_HTML)
    assert str(headers) == "Content-Type: text/html; charset=utf-8\r\n"


def test_parse_content_type():
    headers = Headers()
    headers.insert_raw(
        HeaderValue(HeaderName("Content-Type"), "text/plain; charset=utf-8")
    )
    assert headers.get(ContentType) == ContentType.TEXT_PLAIN
    headers.insert_raw(
        HeaderValue(HeaderName("Content-Type"), "text/html; charset=utf-8")
    )
    assert headers.get(ContentType) == ContentType.TEXT_HTML


def test_content_type_simple():
    content_type = ContentType.parse("application/pdf")
    assert content_type.main_type == "application"
    assert content_type.sub_type == "pdf"
    assert content_type.params == ()
    assert str(content_type) == "application/pdf"


def test_content_type_case_insensitive():
    assert ContentType.parse("Text/Plain; Charset=UTF-8") == ContentType.TEXT_PLAIN


def test_content_type_quoted_parameter():
    content_type = ContentType.parse('multipart/mixed; boundary="a b"')
    assert content_type.params == (("boundary", "a b"),)
    assert str(content_type) == 'multipart/mixed; boundary="a b"'
    assert ContentType.parse(str(content_type)) == content_type


@pytest.mark.parametrize("text", ["", "text", "/plain", "text/", "text/plain; charset"])
def test_content_type_invalid(text):
    with pytest.raises(ContentTypeError):
        ContentType.parse(text)


def test_content_type_serializable_round_trip():
    data = ContentType.TEXT_HTML.to_serializable()
    assert data == "text/html; charset=utf-8"
    assert ContentType.from_serializable(data) == ContentType.TEXT_HTML


def test_content_type_from_serializable_error():
    with pytest.raises(ContentTypeError, match="Couldn't parse the following MIME-Type"):
        ContentType.from_serializable("nonsense")