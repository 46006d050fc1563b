"""
Host (animal species) categories, the "Dyreart" column of a VetLIMS export.

Built once at import from the name list in data/hosts.csv.

>>> Host.parse("Okse")
<Host.Okse: ('Okse', 'Cattle')>
>>> Host.Okse.english
'Cattle'
"""

import pathlib

from .vocabulary import dedup_categories, load_name_list, make_vocabulary_enum

HOSTS_NAME_LIST = pathlib.Path(__file__).parent / "data" / "hosts.csv"

HOST_ENTRIES = dedup_categories(load_name_list(HOSTS_NAME_LIST))
Host = make_vocabulary_enum("Host", HOST_ENTRIES, module=__name__)
