"""Known boroughs, formats and surface types used to populate choices.

These are suggestions for pickers, not a closed set: listings may carry any
other value and filtering treats them as plain strings.
"""

BOROUGHS = [
    "Ahuntsic-Cartierville",
    "Anjou",
    "Boucherville",
    "Brossard",
    "Candiac",
    "Châteauguay",
    "Côte-des-Neiges–Notre-Dame-de-Grâce",
    "La Prairie",
    "Lachine",
    "Lasalle",
    "Le Sud-Ouest",
    "Longueuil",
    "L'Île-Bizard–Sainte-Geneviève",
    "Mercier–Hochelaga-Maisonneuve",
    "Montréal-Nord",
    "Outremont",
    "Pierrefonds-Roxboro",
    "Plateau-Mont-Royal",
    "Rivière-des-Prairies–Pointe-aux-Trembles",
    "Rosemont–La Petite-Patrie",
    "Saint-Constant",
    "Saint-Hubert",
    "Saint-Lambert",
    "Saint-Léonard",
    "Verdun",
    "Ville-Marie",
    "Villeray–Saint-Michel–Parc-Extension",
]

FORMAT_OPTIONS = ["5v5", "7v7", "11v11"]

SURFACE_TYPES = ["Natural", "Artificial", "Indoor"]

OTHER_OPTION = "Other"


def select_options(values: list[str]) -> list[str]:
    """Form choices: a blank entry, the known values in order, then "Other"."""
    seen = []
    for value in [*values, OTHER_OPTION]:
        if value not in seen:
            seen.append(value)
    return ["", *seen]
