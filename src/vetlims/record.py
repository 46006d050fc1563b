"""
LIMSRow domain model.

One LIMSRow is created per row of a VetLIMS CSV export by the mapper.
"""

import typing
from dataclasses import dataclass
from datetime import date, datetime

from .case_number import CaseNumber
from .hosts import Host
from .materials import Material
from .sample_number import SampleNumber
from .vnumber import VNumber


@dataclass(frozen=True)
class LIMSRow:
    """
    The minimum relevant information about a sample.

    Attributes:
        samplenum: Sample and subsample number ("Prøve id").
        vnum: Internal number ("Internt nr.").
        sag: Case number ("Sags ID"), legacy or year format.
        sampledate: Date the sample was taken ("Udtagelsesdato"), if known.
        material: Sample material ("Materiale"), if known.
        host: Host species ("Dyreart").
        receivedate: Time the sample was received ("Modtagelsestidspunkt").
    """

    samplenum: SampleNumber
    vnum: VNumber
    sag: CaseNumber
    sampledate: typing.Optional[date]
    material: typing.Optional[Material]
    host: Host
    receivedate: datetime

    def to_dict(self) -> dict[str, typing.Optional[str]]:
        """Flat, string-valued view with identifiers in their canonical form."""
        return {
            "samplenum": str(self.samplenum),
            "vnum": str(self.vnum),
            "sag": str(self.sag),
            "sampledate": self.sampledate.isoformat() if self.sampledate else None,
            "material": self.material.danish if self.material else None,
            "host": self.host.danish,
            "receivedate": self.receivedate.isoformat(timespec="minutes"),
        }
