"""Bundled knowledge base catalog for the school food program."""

ALLERGENS: list[dict[str, str]] = [
    {"name": "egg", "description": "Eggs and egg products"},
    {"name": "dairy", "description": "Milk and milk products"},
    {"name": "fish", "description": "Fish"},
    {"name": "shellfish", "description": "Shellfish and shrimp"},
    {"name": "soy", "description": "Soybeans and soy products"},
    {"name": "gluten", "description": "Wheat, flour and wheat products"},
    {"name": "peanut", "description": "Peanuts"},
    {"name": "tree_nut", "description": "Tree nuts (almond, walnut, ...)"},
]

INGREDIENTS: list[dict[str, object]] = [
    # protein
    {"name": "ayam", "category": "protein",
     "synonyms": "ayam kampung,dada ayam,ayam fillet", "allergens": []},
    {"name": "daging sapi", "category": "protein",
     "synonyms": "sapi,daging", "allergens": []},
    {"name": "ikan nila", "category": "seafood",
     "synonyms": "ikan", "allergens": ["fish"]},
    {"name": "ikan tongkol", "category": "seafood", "synonyms": "", "allergens": ["fish"]},
    {"name": "ikan bandeng", "category": "seafood", "synonyms": "", "allergens": ["fish"]},
    {"name": "udang", "category": "seafood", "synonyms": "", "allergens": ["shellfish"]},
    {"name": "telur", "category": "protein", "synonyms": "telur ayam", "allergens": ["egg"]},
    {"name": "tempe", "category": "soy", "synonyms": "", "allergens": ["soy"]},
    {"name": "tahu", "category": "soy", "synonyms": "", "allergens": ["soy"]},
    # carb
    {"name": "nasi putih", "category": "carb", "synonyms": "nasi", "allergens": []},
    {"name": "nasi goreng", "category": "carb", "synonyms": "", "allergens": []},
    {"name": "kentang", "category": "carb", "synonyms": "", "allergens": []},
    {"name": "ubi", "category": "carb", "synonyms": "ubi jalar", "allergens": []},
    {"name": "roti", "category": "gluten",
     "synonyms": "roti tawar,roti gandum", "allergens": ["gluten"]},
    {"name": "spaghetti", "category": "gluten", "synonyms": "pasta", "allergens": ["gluten"]},
    {"name": "mie", "category": "gluten", "synonyms": "mi,mie instan", "allergens": ["gluten"]},
    # vegetable
    {"name": "kangkung", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "buncis", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "wortel", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "kubis", "category": "vegetable", "synonyms": "kol", "allergens": []},
    {"name": "bayam", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "brokoli", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "edamame", "category": "soy", "synonyms": "", "allergens": ["soy"]},
    {"name": "tomat", "category": "vegetable", "synonyms": "", "allergens": []},
    {"name": "timun", "category": "vegetable", "synonyms": "ketimun", "allergens": []},
    # fruit
    {"name": "pisang", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "jeruk", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "apel", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "semangka", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "melon", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "anggur", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "pepaya", "category": "fruit", "synonyms": "", "allergens": []},
    {"name": "pir", "category": "fruit", "synonyms": "", "allergens": []},
    # dairy
    {"name": "susu", "category": "dairy", "synonyms": "susu sapi", "allergens": ["dairy"]},
    {"name": "keju", "category": "dairy", "synonyms": "", "allergens": ["dairy"]},
    {"name": "yogurt", "category": "dairy", "synonyms": "", "allergens": ["dairy"]},
    {"name": "mentega", "category": "dairy", "synonyms": "", "allergens": ["dairy"]},
    # seasoning
    {"name": "kecap", "category": "soy", "synonyms": "kecap manis", "allergens": ["soy"]},
    {"name": "kecap asin", "category": "soy", "synonyms": "", "allergens": ["soy"]},
    {"name": "santan", "category": "misc", "synonyms": "santan kelapa", "allergens": []},
    {"name": "bawang merah", "category": "misc", "synonyms": "", "allergens": []},
    {"name": "bawang putih", "category": "misc", "synonyms": "", "allergens": []},
    {"name": "cabai", "category": "misc", "synonyms": "cabai merah,cabe", "allergens": []},
    {"name": "tepung terigu", "category": "gluten",
     "synonyms": "terigu", "allergens": ["gluten"]},
    {"name": "gula", "category": "misc", "synonyms": "gula pasir", "allergens": []},
    {"name": "garam", "category": "misc", "synonyms": "", "allergens": []},
    {"name": "madu", "category": "misc", "synonyms": "", "allergens": []},
    {"name": "kunyit", "category": "misc", "synonyms": "", "allergens": []},
]

MENU_CASES: list[dict[str, object]] = [
    {"id": "case-ayam-bakar", "base": "ayam", "menu_name": "Ayam Bakar Madu",
     "description": "Grilled chicken with honey glaze",
     "calories": 650, "protein": "35g", "carbs": "75g", "fat": "20g"},
    {"id": "case-ayam-goreng", "base": "ayam", "menu_name": "Ayam Goreng Krispy",
     "description": "Crispy battered fried chicken",
     "calories": 700, "protein": "40g", "carbs": "60g", "fat": "28g"},
    {"id": "case-soto-ayam", "base": "ayam", "menu_name": "Soto Ayam",
     "description": "Chicken soup with turmeric broth",
     "calories": 580, "protein": "28g", "carbs": "68g", "fat": "16g"},
    {"id": "case-ikan-goreng", "base": "ikan nila", "menu_name": "Ikan Goreng Kecap",
     "description": "Fried tilapia with sweet soy sauce",
     "calories": 600, "protein": "30g", "carbs": "70g", "fat": "18g"},
    {"id": "case-rendang", "base": "daging sapi", "menu_name": "Rendang Sapi",
     "description": "Beef rendang in coconut milk",
     "calories": 720, "protein": "40g", "carbs": "80g", "fat": "25g"},
    {"id": "case-tongkol-balado", "base": "ikan tongkol", "menu_name": "Tongkol Balado",
     "description": "Tuna with balado chili sauce",
     "calories": 620, "protein": "32g", "carbs": "65g", "fat": "22g"},
]
