"""Django Unfold admin configuration."""

from django.urls import reverse_lazy
from django.utils.translation import gettext_lazy as _

from .base import SITE_NAME, VERSION

UNFOLD = {
    "SITE_TITLE": f"{SITE_NAME} v{VERSION} Admin",
    "SITE_HEADER": f"{SITE_NAME} v{VERSION} Administration",
    "SITE_URL": "/",
    "SHOW_VIEW_ON_SITE": False,
    "COLORS": {
        "primary": {
            "50": "250 247 240",
            "100": "243 236 218",
            "200": "231 216 178",
            "300": "216 192 132",
            "400": "201 168 92",
            "500": "184 146 64",
            "600": "156 121 50",
            "700": "125 95 41",
            "800": "99 76 35",
            "900": "80 62 30",
            "950": "45 34 16",
        },
    },
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": _("Members"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Members"),
                        "icon": "person",
                        "link": reverse_lazy("admin:accounts_maisonuser_changelist"),
                    },
                    {
                        "title": _("Privacy Preferences"),
                        "icon": "visibility_off",
                        "link": reverse_lazy("admin:participants_privacypreferences_changelist"),
                    },
                ],
            },
            {
                "title": _("Events"),
                "separator": True,
                "collapsible": True,
                "items": [
                    {
                        "title": _("Events"),
                        "icon": "event",
                        "link": reverse_lazy("admin:events_event_changelist"),
                    },
                    {
                        "title": _("Participant Access"),
                        "icon": "key",
                        "link": reverse_lazy("admin:participants_participantaccess_changelist"),
                    },
                    {
                        "title": _("Privacy Overrides"),
                        "icon": "tune",
                        "link": reverse_lazy("admin:participants_eventprivacyoverride_changelist"),
                    },
                    {
                        "title": _("Contact Requests"),
                        "icon": "mail",
                        "link": reverse_lazy("admin:participants_contactrequest_changelist"),
                    },
                    {
                        "title": _("View Log"),
                        "icon": "history",
                        "link": reverse_lazy("admin:participants_participantviewlog_changelist"),
                    },
                ],
            },
        ],
    },
}
