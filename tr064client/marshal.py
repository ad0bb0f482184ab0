SWITCH_ON = "ON"


def _int(value):
    return int(value, 10)


def _switch(value):
    # OFF, TOGGLE and UNDEFINED all count as off.
    return 1 if value == SWITCH_ON else 0


MARSHAL_FUNCTIONS = {
    "int": _int,
    "switch": _switch,
    "string": str,
}


def marshal_value(field_type, value):
    """
    Convert the raw text of a response value according to `field_type`.
    Returns a tuple of whether the value was converted and the value itself.
    Unknown field types leave the text untouched. Raises ValueError if the text
    doesn't fit the type.
    """
    try:
        func = MARSHAL_FUNCTIONS[field_type]
    except KeyError:
        return False, value
    return True, func(value)
