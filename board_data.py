"""
Static "Standard Game" dataset for the Evacuation of Königsberg.

Spaces 1-52 form the playable map: the Samland coast in the west, Königsberg
and the Frisches Haff shore in the middle, East Prussia towards the east.
Track slots hold chits and markers and are never adjacent to anything.
Nothing in this module is mutated at runtime.
"""

SCENARIOS = ["Standard Game"]

# (id, name, x, y)
MAP_SPACES = [
    ("1", "Mehlauken", 560, 80),
    ("2", "Tapiau", 560, 190),
    ("3", "Wehlau", 560, 300),
    ("4", "Friedland", 560, 410),
    ("5", "Tilsit", 680, 80),
    ("6", "Insterburg", 680, 190),
    ("7", "Allenburg", 680, 300),
    ("8", "Domnau", 680, 410),
    ("9", "Preußisch Eylau", 680, 520),
    ("10", "Bartenstein", 680, 630),
    ("11", "Heilsberg", 680, 740),
    ("12", "Ragnit", 800, 80),
    ("13", "Gumbinnen", 800, 190),
    ("14", "Gerdauen", 800, 300),
    ("15", "Schippenbeil", 800, 410),
    ("16", "Rastenburg", 800, 520),
    ("17", "Bischofstein", 800, 630),
    ("18", "Guttstadt", 800, 740),
    ("19", "Pillkallen", 920, 80),
    ("20", "Zinten", 560, 520),
    ("21", "Stallupönen", 920, 190),
    ("22", "Darkehmen", 920, 300),
    ("23", "Angerburg", 920, 410),
    ("24", "Landsberg", 560, 630),
    ("25", "Labiau", 440, 80),
    ("26", "Lindenau", 440, 190),
    ("27", "Arnau", 440, 300),
    ("28", "Haffstrom", 440, 410),
    ("29", "Ludwigsort", 440, 520),
    ("30", "Heiligenbeil", 440, 630),
    ("31", "Mehlsack", 440, 740),
    ("32", "Neuhausen", 320, 80),
    ("33", "Quednau", 320, 190),
    ("34", "Metgethen", 320, 300),
    ("35", "Königsberg", 320, 410),
    ("36", "Ponarth", 320, 520),
    ("37", "Brandenburg", 320, 630),
    ("38", "Braunsberg", 320, 740),
    ("39", "Laptau", 200, 80),
    ("40", "Germau", 200, 190),
    ("41", "Medenau", 200, 300),
    ("42", "Powayen", 200, 410),
    ("43", "Peyse", 200, 520),
    ("44", "Balga", 200, 630),
    ("45", "Frauenburg", 200, 740),
    ("46", "Cranz", 80, 80),
    ("47", "Rauschen", 80, 190),
    ("48", "Palmnicken", 80, 300),
    ("49", "Fischhausen", 80, 410),
    ("50", "Pillau", 80, 520),
    ("51", "Neutief", 80, 630),
    ("52", "Kahlberg", 80, 740),
]

TRACK_SPACES = [
    ("track_land", "Land Stance", 1100, 80),
    ("track_naval", "Naval Stance", 1180, 80),
    ("track_navy1", "German Navy 1", 1100, 190),
    ("track_navy2", "German Navy 2", 1180, 190),
    ("track_navy3", "German Navy 3", 1260, 190),
    ("track_shipping1", "German Shipping 1", 1100, 300),
    ("track_shipping2", "German Shipping 2", 1180, 300),
    ("track_shipping3", "German Shipping 3", 1260, 300),
    ("track_sov_act1", "Soviet Activation 1", 1100, 410),
    ("track_sov_act2", "Soviet Activation 2", 1180, 410),
    ("track_sov_act3", "Soviet Activation 3", 1260, 410),
]

# Each row is [space, *neighbors]. Rows need not be symmetric.
ADJACENCY = [
    ["46", "39", "47"],
    ["47", "40", "48"],
    ["48", "41", "49"],
    ["49", "42", "50"],
    ["50", "43", "51"],
    ["51", "44", "52"],
    ["52", "45"],
    ["39", "32", "40"],
    ["40", "33", "41"],
    ["41", "34", "42"],
    ["42", "35", "43"],
    ["43", "36", "44"],
    ["44", "37", "45"],
    ["45", "38"],
    ["32", "25", "33"],
    ["33", "26", "34"],
    ["34", "27", "35"],
    ["35", "28", "36"],
    ["36", "29", "37"],
    ["37", "30", "38"],
    ["38", "31"],
    ["25", "1", "26"],
    ["26", "2", "27"],
    ["27", "3", "28"],
    ["28", "4", "29"],
    ["29", "20", "30"],
    ["30", "24", "31"],
    ["1", "5", "2"],
    ["2", "6", "3"],
    ["3", "7", "4"],
    ["4", "8", "20"],
    ["20", "9", "24"],
    ["24", "10"],
    ["5", "12", "6"],
    ["6", "13", "7"],
    ["7", "14", "8"],
    ["8", "15", "9"],
    ["9", "16", "10"],
    ["10", "17", "11"],
    ["11", "18"],
    ["12", "19", "13"],
    ["13", "21", "14"],
    ["14", "22", "15"],
    ["15", "23", "16"],
    ["16", "17"],
    ["17", "18"],
    ["19", "21"],
    ["21", "22"],
    ["22", "23"],
]

# Setup zones
GERMAN_SETUP_SPACES = [str(s) for s in list(range(1, 5)) + [20] + list(range(24, 53))]
SOVIET_SETUP_SPACES = [str(s) for s in range(2, 25)]

# Land CEF doubles while the Germans hold the whole Königsberg perimeter
LAND_PERIMETER = ["27", "28", "29"]

# Each set fully held by the Soviets costs -1 on the Sea CEF roll
SEA_SOVIET_SETS = [
    ["30", "31"],
    ["37", "38"],
]

STANCE_SLOTS = {"track_land": "Land", "track_naval": "Naval"}
NAVY_TRACK = ["track_navy1", "track_navy2", "track_navy3"]
SHIPPING_TRACK = ["track_shipping1", "track_shipping2", "track_shipping3"]
SOVIET_ACTIVATION_TRACK = ["track_sov_act1", "track_sov_act2", "track_sov_act3"]

# (id, name, side, type, combat, cohesion, army, space)
UNITS = [
    ("ger_gd", "Pz.Korps Grossdeutschland", "german", "armor", 4, 4, "4A", None),
    ("ger_ix", "IX Korps", "german", "infantry", 3, 3, "3PzA", None),
    ("ger_xxvi", "XXVI Korps", "german", "infantry", 3, 3, "4A", None),
    ("ger_xxviii", "XXVIII Korps", "german", "infantry", 2, 3, "3PzA", None),
    ("ger_lv", "LV Korps", "german", "infantry", 2, 2, "4A", None),
    ("ger_vi", "VI Korps", "german", "infantry", 3, 2, "4A", None),

    ("sov_11ga_8", "8th Guards Rifle Corps", "soviet", "infantry", 4, 3, "11GA", None),
    ("sov_11ga_16", "16th Guards Rifle Corps", "soviet", "infantry", 4, 3, "11GA", None),
    ("sov_11ga_36", "36th Guards Rifle Corps", "soviet", "infantry", 4, 3, "11GA", None),
    ("sov_1tk", "1st Tank Corps", "soviet", "armor", 5, 4, "11GA", None),
    ("sov_39a_5", "5th Guards Rifle Corps", "soviet", "infantry", 3, 3, "39A", None),
    ("sov_39a_113", "113th Rifle Corps", "soviet", "infantry", 3, 3, "39A", None),
    ("sov_43a_13", "13th Guards Rifle Corps", "soviet", "infantry", 3, 3, "43A", None),
    ("sov_43a_54", "54th Rifle Corps", "soviet", "infantry", 3, 3, "43A", None),
    ("sov_5a_45", "45th Rifle Corps", "soviet", "infantry", 3, 2, "5A", None),
    ("sov_5a_65", "65th Rifle Corps", "soviet", "infantry", 3, 2, "5A", None),
    ("sov_2ga_11", "11th Guards Rifle Corps", "soviet", "infantry", 3, 3, "2GA", None),
    ("sov_2ga_60", "60th Rifle Corps", "soviet", "infantry", 3, 3, "2GA", None),

    ("fort_konigsberg", "Festung Königsberg", "neutral", "fort", 0, 5, None, "35"),
    ("fort_metgethen", "Metgethen Line", "neutral", "fort", 0, 3, None, "34"),
    ("fort_pillau", "Festung Pillau", "neutral", "fort", 0, 4, None, "50"),

    ("chit_stance", "Stance", "german", "chit", 0, 1, None, None),
    ("chit_navy_1", "German Navy", "german", "chit", 0, 1, None, None),
    ("chit_navy_2", "German Navy", "german", "chit", 0, 1, None, None),
    ("chit_navy_3", "German Navy", "german", "chit", 0, 1, None, None),
    ("chit_shipping_1", "German Shipping", "german", "chit", 0, 1, None, None),
    ("chit_shipping_2", "German Shipping", "german", "chit", 0, 1, None, None),
    ("chit_shipping_3", "German Shipping", "german", "chit", 0, 1, None, None),
    ("chit_sov_act_1", "Soviet Activation", "soviet", "chit", 0, 1, None, None),
    ("chit_sov_act_2", "Soviet Activation", "soviet", "chit", 0, 1, None, None),
    ("chit_sov_act_3", "Soviet Activation", "soviet", "chit", 0, 1, None, None),
]

STANCE_CHIT = "chit_stance"
NAVY_CHITS = ["chit_navy_1", "chit_navy_2", "chit_navy_3"]
SHIPPING_CHITS = ["chit_shipping_1", "chit_shipping_2", "chit_shipping_3"]
SOVIET_ACTIVATION_CHITS = ["chit_sov_act_1", "chit_sov_act_2", "chit_sov_act_3"]
