"""Modifier reference table with usage and compatibility rules."""

from types import MappingProxyType

from ..schemas.reference import Modifier

EM_CPT_CODES = (
    "99201",
    "99202",
    "99203",
    "99204",
    "99205",
    "99211",
    "99212",
    "99213",
    "99214",
    "99215",
)

# Modifiers that override an NCCI bundling edit.
UNBUNDLING_MODIFIERS = frozenset({"59", "XE", "XP", "XS", "XU"})

MODIFIERS = MappingProxyType(
    {
        # Anatomical
        "LT": Modifier(
            code="LT",
            name="Left Side",
            description="Left side of body",
            category="anatomical",
            usage="Identify procedure performed on left side",
            incompatible_modifiers=("RT", "50"),
        ),
        "RT": Modifier(
            code="RT",
            name="Right Side",
            description="Right side of body",
            category="anatomical",
            usage="Identify procedure performed on right side",
            incompatible_modifiers=("LT", "50"),
        ),
        "50": Modifier(
            code="50",
            name="Bilateral Procedure",
            description="Same procedure performed on both sides",
            category="anatomical",
            usage="Bilateral procedures paid at 150% of the single rate",
            incompatible_modifiers=("LT", "RT"),
        ),
        # NCCI unbundling
        "59": Modifier(
            code="59",
            name="Distinct Procedural Service",
            description="Procedure distinct from other services on same day",
            category="procedural",
            usage="Override NCCI bundling when clinically appropriate",
            requires_documentation=True,
        ),
        "XE": Modifier(
            code="XE",
            name="Separate Encounter",
            description="Separate encounter, distinct date of service",
            category="procedural",
            usage="More specific than 59 for separate encounter",
            incompatible_modifiers=("59", "XP", "XS", "XU"),
        ),
        "XP": Modifier(
            code="XP",
            name="Separate Practitioner",
            description="Separate practitioner",
            category="procedural",
            usage="More specific than 59 for different provider",
            incompatible_modifiers=("59", "XE", "XS", "XU"),
        ),
        "XS": Modifier(
            code="XS",
            name="Separate Structure",
            description="Separate structure",
            category="anatomical",
            usage="More specific than 59 for different anatomic structure",
            incompatible_modifiers=("59", "XE", "XP", "XU"),
        ),
        "XU": Modifier(
            code="XU",
            name="Unusual Non-Overlapping",
            description="Unusual non-overlapping service",
            category="procedural",
            usage="More specific than 59 for unique circumstances",
            incompatible_modifiers=("59", "XE", "XP", "XS"),
        ),
        # Drug
        "JW": Modifier(
            code="JW",
            name="Drug Wastage",
            description="Drug amount discarded/not administered to patient",
            category="drug",
            usage="Required for Medicare when discarding unused drug portions",
            requires_documentation=True,
        ),
        "JZ": Modifier(
            code="JZ",
            name="No Drug Wastage",
            description="Certifies that no drug was discarded",
            category="drug",
            usage="Report on single-dose container drugs with no discarded amount",
            incompatible_modifiers=("JW",),
        ),
        # Payment components
        "26": Modifier(
            code="26",
            name="Professional Component",
            description="Professional component only",
            category="payment",
            usage="When billing only for professional interpretation",
            incompatible_modifiers=("TC",),
        ),
        "TC": Modifier(
            code="TC",
            name="Technical Component",
            description="Technical component only",
            category="payment",
            usage="When billing only for equipment and technician",
            incompatible_modifiers=("26",),
        ),
        # E/M and global surgery
        "25": Modifier(
            code="25",
            name="Significant E/M",
            description="Significant, separately identifiable E/M service by same physician on same day of procedure",
            category="procedural",
            usage="Append to E/M code when performing same-day procedure",
            applicable_cpts=EM_CPT_CODES,
            requires_documentation=True,
        ),
        "24": Modifier(
            code="24",
            name="Unrelated E/M During Postop",
            description="Unrelated E/M service during postoperative period",
            category="global",
            usage="E/M unrelated to the surgery during its global period",
            requires_documentation=True,
        ),
        "57": Modifier(
            code="57",
            name="Decision for Surgery",
            description="E/M service that resulted in decision to perform surgery",
            category="global",
            usage="Append to E/M code on the day before or day of major surgery",
            applicable_cpts=EM_CPT_CODES,
        ),
    }
)
