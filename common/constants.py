# Standard reference pressure for volumetric flow units (kPa)
P_STD = 101.325

# Reference temperatures (K)
T_NORMAL = 273.15      # Nm3
T_STD_60F = 288.706    # scf @ 60 F
T_STD_70F = 294.261    # scf @ 70 F

# Fixed conversion factors
KPA_TO_BAR = 0.01
KPA_TO_PSI = 0.145038
KG_TO_LBM = 2.20462
M3_TO_FT3 = 35.3147
M_TO_FT = 3.28084
KJKG_TO_BTULBM = 0.429923

COMPONENTS = (
    "methane", "nitrogen", "carbon_dioxide", "ethane", "propane",
    "isobutane", "n_butane", "isopentane", "n_pentane", "hexane",
    "heptane", "octane", "nonane", "decane", "hydrogen", "oxygen",
    "carbon_monoxide", "water", "hydrogen_sulfide", "helium", "argon",
)

GAS_LIBRARY = {
    "Air":             {"nitrogen": 0.78, "oxygen": 0.21, "argon": 0.01},
    "Argon":           {"argon": 1.0},
    "Carbon Monoxide": {"carbon_monoxide": 1.0},
    "Carbon Dioxide":  {"carbon_dioxide": 1.0},
    "Helium":          {"helium": 1.0},
    "Hydrogen":        {"hydrogen": 1.0},
    "Nitrogen":        {"nitrogen": 1.0},
    "Oxygen":          {"oxygen": 1.0},
}

