"""CMS place of service codes."""

from types import MappingProxyType

from ..schemas.reference import PlaceOfService

PLACE_OF_SERVICE = MappingProxyType(
    {
        "11": PlaceOfService(
            code="11",
            name="Office",
            description="Location where health professionals routinely provide services",
        ),
        "12": PlaceOfService(code="12", name="Home", description="Patient's home"),
        "19": PlaceOfService(
            code="19",
            name="Off Campus-Outpatient Hospital",
            description="Off campus outpatient hospital department",
            facility=True,
        ),
        "21": PlaceOfService(
            code="21",
            name="Inpatient Hospital",
            description="Hospital inpatient facility",
            facility=True,
        ),
        "22": PlaceOfService(
            code="22",
            name="On Campus-Outpatient Hospital",
            description="Hospital outpatient facility on campus",
            facility=True,
        ),
        "23": PlaceOfService(
            code="23",
            name="Emergency Room",
            description="Hospital emergency department",
            facility=True,
        ),
        "24": PlaceOfService(
            code="24",
            name="Ambulatory Surgical Center",
            description="Freestanding ambulatory surgical center",
            facility=True,
        ),
        "31": PlaceOfService(
            code="31",
            name="Skilled Nursing Facility",
            description="Skilled nursing facility for rehabilitation",
            facility=True,
        ),
        "32": PlaceOfService(
            code="32",
            name="Nursing Facility",
            description="Long-term care nursing facility",
        ),
        "49": PlaceOfService(
            code="49",
            name="Independent Clinic",
            description="Freestanding clinic not part of hospital",
        ),
        "50": PlaceOfService(
            code="50",
            name="Federally Qualified Health Center",
            description="FQHC providing comprehensive primary care",
        ),
        "53": PlaceOfService(
            code="53",
            name="Community Mental Health Center",
            description="Community-based mental health facility",
            facility=True,
        ),
    }
)
