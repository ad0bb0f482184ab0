"""
Action specs for AVM's X_AVM-DE_Homeauto service (smart plugs such as the
FRITZ!DECT 200/210).
"""
from .const import HOMEAUTO_CONTROL_URL, HOMEAUTO_SERVICE_TYPE
from .soap import render_arguments
from .tr064 import ActionSpec, ResultField

SWITCH_STATES = ("OFF", "ON", "TOGGLE")

# power in 1/100 W, energy in Wh, temperature in 1/10 degrees Celsius.
DEVICE_INFO_FIELDS = (
    ResultField("power", "NewMultimeterPower", "int"),
    ResultField("energy", "NewMultimeterEnergy", "int"),
    ResultField("temperature", "NewTemperatureCelsius", "int"),
    ResultField("switch_state", "NewSwitchState", "switch"),
)


def get_generic_device_infos(index):
    return ActionSpec(
        HOMEAUTO_CONTROL_URL,
        HOMEAUTO_SERVICE_TYPE,
        "GetGenericDeviceInfos",
        render_arguments([("NewIndex", int(index))]),
        DEVICE_INFO_FIELDS,
    )


def get_specific_device_infos(ain):
    return ActionSpec(
        HOMEAUTO_CONTROL_URL,
        HOMEAUTO_SERVICE_TYPE,
        "GetSpecificDeviceInfos",
        render_arguments([("NewAIN", ain)]),
        DEVICE_INFO_FIELDS,
    )


def set_switch(ain, state):
    """
    Switch the plug with the given AIN. `state` is one of OFF, ON or TOGGLE.
    """
    state = state.upper()
    if state not in SWITCH_STATES:
        raise ValueError(
            "Switch state must be one of %s, not %r" % (", ".join(SWITCH_STATES), state)
        )
    return ActionSpec(
        HOMEAUTO_CONTROL_URL,
        HOMEAUTO_SERVICE_TYPE,
        "SetSwitch",
        render_arguments([("NewAIN", ain), ("NewSwitchState", state)]),
    )
