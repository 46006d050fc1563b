"""
Material (sample material) categories, the "Materiale" column of a VetLIMS export.

Built once at import from the name list in data/materials.csv.
"""

import pathlib

from .vocabulary import dedup_categories, load_name_list, make_vocabulary_enum

MATERIALS_NAME_LIST = pathlib.Path(__file__).parent / "data" / "materials.csv"

MATERIAL_ENTRIES = dedup_categories(load_name_list(MATERIALS_NAME_LIST))
Material = make_vocabulary_enum("Material", MATERIAL_ENTRIES, module=__name__)
