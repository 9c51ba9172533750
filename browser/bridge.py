"""In-page script that forwards DOM input events to the Python controller.

The page does no navigation itself: it only suppresses default scrolling for
navigation keys and posts small event dicts through an exposed binding.
"""

import json

from slide_engine.inputs import SUPPRESS_DEFAULT_KEYS

BRIDGE_BINDING = "__slideEngineDispatch"

_BRIDGE_TEMPLATE = """
(() => {
    if (window.__slideEngineBridge) return;
    window.__slideEngineBridge = true;
    const send = (payload) => {
        const dispatch = window[%(binding)s];
        if (typeof dispatch === 'function') dispatch(payload);
    };
    const suppressed = new Set(%(suppressed)s);

    document.addEventListener('keydown', (e) => {
        if (suppressed.has(e.key)) e.preventDefault();
        send({ type: 'key', key: e.key });
    });

    document.addEventListener('click', (e) => {
        const path = [];
        for (let node = e.target; node && node.tagName; node = node.parentElement) {
            path.push(node.tagName.toLowerCase());
        }
        send({ type: 'click', x: e.clientX, width: window.innerWidth, path });
    });

    document.addEventListener('touchstart', (e) => {
        const t = e.touches[0];
        send({ type: 'touchstart', x: t.clientX, y: t.clientY });
    }, { passive: true });

    document.addEventListener('touchend', (e) => {
        const t = e.changedTouches[0];
        send({ type: 'touchend', x: t.clientX, y: t.clientY });
    }, { passive: true });
})();
"""


def bridge_script(binding: str = BRIDGE_BINDING) -> str:
    return _BRIDGE_TEMPLATE % {
        "binding": json.dumps(binding),
        "suppressed": json.dumps(sorted(SUPPRESS_DEFAULT_KEYS)),
    }
