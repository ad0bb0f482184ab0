from .errors import ExtractionError
from .marshal import marshal_value


def find_tag_text(body, tag):
    """
    Best-effort flat tag lookup. Returns the text between the first occurrence
    of `tag` and the next one, or None if either is missing.

    This is a literal substring scan, not an XML parser: it doesn't know about
    nesting, repeated elements, CDATA or entities. It only works for the known
    flat responses of the configured actions.
    """
    start = body.find(tag)
    if start == -1:
        return None
    begin = body.find(">", start + len(tag))
    if begin == -1:
        return None
    begin += 1
    end = body.find(tag, begin)
    if end == -1:
        return None
    end = body.rfind("<", begin, end)
    if end == -1:
        return None
    return body[begin:end]


def extract(body, result_fields):
    """
    Pull every field of `result_fields` out of `body` and marshal it. Either
    all fields are found or `ExtractionError` is raised; a partial result is
    never returned.
    """
    out = {}
    for field in result_fields:
        text = find_tag_text(body, field.tag)
        if text is None:
            raise ExtractionError(
                "Tag %r for field %r not found in response" % (field.tag, field.name)
            )
        try:
            _, value = marshal_value(field.type, text)
        except ValueError:
            raise ExtractionError(
                "Value %r of tag %r is not a valid %s" % (text, field.tag, field.type)
            )
        out[field.name] = value
    return out
