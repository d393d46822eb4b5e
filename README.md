# missive

Building blocks for composing email messages: validated addresses, SMTP
envelopes, typed headers with RFC 2047 encoding and line folding, and message
bodies with an automatically chosen `Content-Transfer-Encoding`.

## Installation

```
pip install missive
```

## Addresses and envelopes

```python
from missive.address import Address
from missive.envelope import Envelope

sender = Address.parse("sender@example.com")
recipient = Address("someone", "example.com")

print(recipient.user, recipient.domain)   # someone example.com

envelope = Envelope(sender, [recipient])
print(envelope.to)       # tuple of recipient addresses
print(envelope.from_)    # the sender, or None
print(envelope.to_dict())
```

Addresses accept domain names (internationalised ones are checked through
IDNA) and IP literals such as `[2606:4700:4700::1111]`. Invalid input raises
`missive.address.AddressError`, whose `kind` is an `AddressErrorKind`.
An envelope without recipients raises `missive.error.MissingToError`.
`Address.to_serializable` / `Address.from_serializable` and
`Envelope.to_dict` / `Envelope.from_dict` convert to and from plain
JSON-friendly data.

## Headers

```python
from missive.headers import Headers, HeaderName, HeaderValue
from missive.textual import Subject, MimeVersion
from missive.content import ContentType, ContentTransferEncoding
from missive.date import Date

headers = Headers()
headers.set(Subject("Тема сообщения"))
headers.set(MimeVersion(1, 0))
headers.set(ContentType.parse("text/plain; charset=utf-8"))
headers.set(ContentTransferEncoding.SEVEN_BIT)
headers.set(Date.now())

print(str(headers))
# Subject: =?utf-8?b?0KLQtdC80LAg0YHQvtC+0LHRidC10L3QuNGP?=
# MIME-Version: 1.0
# Content-Type: text/plain; charset=utf-8
# Content-Transfer-Encoding: 7bit
# Date: ... +0000

subject = headers.get(Subject)   # parsed back into a Subject, or None

headers.insert_raw(HeaderValue(HeaderName("X-Custom"), "value"))
```

Header names are matched without regard to case; setting a header that is
already present replaces it in place. Non-ASCII text is written as RFC 2047
encoded words and long values are folded at 76 columns. The free-text headers
in `missive.textual` are `Subject`, `Comments`, `Keywords`, `InReplyTo`,
`References`, `MessageId`, `UserAgent`, `ContentId` and `ContentLocation`.

## Content disposition

```python
from missive.content import ContentDisposition

ContentDisposition.attachment("invoice.pdf")
ContentDisposition.inline_with_name("photo.jpg")
ContentDisposition.inline()
```

File names that are not printable ASCII, or too long for one line, are
written with RFC 2231 parameter encoding.

## Bodies

```python
from missive.body import Body
from missive.content import ContentTransferEncoding

body = Body.encode("Questo messaggio è corto")
print(body.encoding)   # quoted-printable
print(bytes(body))     # b'Questo messaggio =C3=A8 corto'

Body.with_encoding(b"\x00" * 80, ContentTransferEncoding.BASE64)
```

`Body.encode` picks the cheapest of 7bit, quoted-printable and base64 for
text; bytes always go as base64. Text line endings are converted to CRLF.
`Body.with_encoding` raises `BodyEncodingError` when the requested encoding
cannot carry the data, and `Body.pre_encoded` wraps a buffer that is already
encoded.

## What this package does not do

It does not assemble complete messages or multipart bodies, has no typed
`From`/`To`/`Cc` mailbox headers, and does not send or store mail: there is
no SMTP client, sendmail or file delivery. Use it to produce the pieces
(headers, envelope, encoded bodies) and hand them to whatever delivers mail.