"""Conference state queries run as JavaScript inside a participant's browser."""

import json
from typing import Any

from selenium.webdriver import Chrome

from .session import as_session, unwrap_driver


def get_resource_jid(participant: Any) -> str:
    """
    Return the resource part of the participant's MUC JID (its MUC nickname).
    """
    return as_session(participant).evaluate("return APP.xmpp.myResource();")


def get_full_muc_jid(participant: Any) -> str:
    """
    Return the participant's full MUC JID, for example
    ``testroom1@muc.server.com/nickname1``.
    """
    return as_session(participant).evaluate("return APP.xmpp.myJid();")


def are_rtp_stats_supported(driver: Any) -> bool:
    """Check whether the browser exposes RTP stats. Only Chrome does."""
    return isinstance(unwrap_driver(driver), Chrome)


def get_local_audio_ssrc(participant: Any) -> str:
    """
    Return the SSRC of the participant's local audio stream as a string.

    A missing SSRC comes back as "null" so it can be put into a script as is.
    """
    ssrc = as_session(participant).evaluate("return APP.xmpp.getLocalSSRC('audio');")
    return "null" if ssrc is None else str(ssrc)


def get_peer_audio_level(observer: Any, participant: Any) -> float | None:
    """
    Return the audio level of participant as measured by observer.

    The level is rounded to two decimals. None means the observer has no
    level for that stream, which is not the same as a level of 0.
    """
    jid = get_full_muc_jid(participant)
    ssrc = get_local_audio_ssrc(participant)

    script = (
        f"var level = APP.statistics.getPeerSSRCAudioLevel({json.dumps(jid)}, {ssrc});"
        "return level != null ? level.toFixed(2) : null;"
    )
    level = as_session(observer).evaluate(script)
    if level is None:
        return None
    return round(float(level), 2)
