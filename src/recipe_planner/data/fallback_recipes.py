"""Canned recipes served when the generation backend is unavailable.

Entries carry no ``id`` or ``protein``; both are filled in per request.
"""

_UNSPLASH_PARAMS = (
    "?ixlib=rb-4.0.3&ixid=M3wxMjA3fDB8MHxwaG90by1wYWdlfHx8fGVufDB8fHx8fA%3D%3D"
    "&auto=format&fit=crop"
)

FALLBACK_RECIPES: tuple[dict[str, object], ...] = (
    {
        "title": "Tofu Scramble with Spinach and Nutritional Yeast",
        "image": (
            "https://images.unsplash.com/photo-1511690078903-71de64ac9c54"
            f"{_UNSPLASH_PARAMS}&w=1364&q=80"
        ),
        "prepTime": 15,
        "calories": 320,
        "carbs": 12,
        "fat": 18,
        "tags": ["high-protein", "quick", "breakfast"],
        "keyBenefits": ["Complete protein", "Iron-rich", "B12 fortified"],
        "ingredients": [
            "14oz firm tofu, pressed and crumbled",
            "2 tbsp nutritional yeast",
            "1 cup spinach, chopped",
            "1/4 cup red bell pepper, diced",
            "1/4 cup onion, diced",
            "1 tbsp olive oil",
            "1/2 tsp turmeric",
            "1/4 tsp black salt (kala namak)",
            "Salt and pepper to taste",
        ],
        "instructions": [
            "Press tofu to remove excess water and crumble into a bowl",
            "Heat olive oil in a pan over medium heat",
            "Add onion and bell pepper, sauté until softened",
            "Add crumbled tofu, turmeric, and black salt",
            "Cook for 5-6 minutes, stirring occasionally",
            "Add spinach and cook until wilted",
            "Sprinkle nutritional yeast and mix well",
            "Season with salt and pepper to taste",
        ],
        "mealType": "breakfast",
        "dietaryLabels": ["Vegan", "Gluten-Free", "High-Protein"],
    },
    {
        "title": "Lentil and Quinoa Power Bowl",
        "image": (
            "https://images.unsplash.com/photo-1512621776951-a57141f2eefd"
            f"{_UNSPLASH_PARAMS}&w=1470&q=80"
        ),
        "prepTime": 25,
        "calories": 450,
        "carbs": 65,
        "fat": 10,
        "tags": ["high-protein", "lunch", "meal-prep"],
        "keyBenefits": ["Complete amino acids", "Fiber-rich", "Sustained energy"],
        "ingredients": [
            "1 cup cooked lentils",
            "1/2 cup cooked quinoa",
            "1 cup roasted vegetables (sweet potato, broccoli, bell peppers)",
            "1/4 cup hummus",
            "1 tbsp tahini",
            "1 tbsp lemon juice",
            "1 tsp cumin",
            "Fresh herbs (parsley, cilantro)",
            "Salt and pepper to taste",
        ],
        "instructions": [
            "Combine lentils and quinoa in a bowl",
            "Add roasted vegetables",
            "Top with a dollop of hummus",
            "Drizzle with tahini and lemon juice",
            "Sprinkle with cumin and fresh herbs",
            "Season with salt and pepper",
            "Mix gently before eating",
        ],
        "mealType": "lunch",
        "dietaryLabels": ["Vegan", "Gluten-Free", "High-Protein", "High-Fiber"],
    },
    {
        "title": "Tempeh and Vegetable Stir-Fry",
        "image": (
            "https://images.unsplash.com/photo-1512058564366-18510be2db19"
            f"{_UNSPLASH_PARAMS}&w=1472&q=80"
        ),
        "prepTime": 20,
        "calories": 380,
        "carbs": 30,
        "fat": 16,
        "tags": ["high-protein", "dinner", "quick"],
        "keyBenefits": ["Fermented protein", "Gut health", "Antioxidant-rich"],
        "ingredients": [
            "8oz tempeh, cubed",
            "2 cups mixed vegetables (broccoli, carrots, snap peas)",
            "2 cloves garlic, minced",
            "1 tbsp ginger, grated",
            "2 tbsp tamari or soy sauce",
            "1 tbsp sesame oil",
            "1 tbsp maple syrup",
            "1 tsp sriracha (optional)",
            "1 tbsp sesame seeds",
            "Green onions for garnish",
        ],
        "instructions": [
            "Cut tempeh into cubes and steam for 10 minutes",
            "In a wok or large pan, heat sesame oil over medium-high heat",
            "Add garlic and ginger, sauté for 30 seconds",
            "Add tempeh and cook until browned on all sides",
            "Add vegetables and stir-fry for 5-7 minutes",
            "In a small bowl, mix tamari, maple syrup, and sriracha",
            "Pour sauce over the stir-fry and toss to coat",
            "Garnish with sesame seeds and green onions",
        ],
        "mealType": "dinner",
        "dietaryLabels": ["Vegan", "High-Protein"],
    },
    {
        "title": "Protein-Packed Chickpea Salad",
        "image": (
            "https://images.unsplash.com/photo-1512621776951-a57141f2eefd"
            f"{_UNSPLASH_PARAMS}&w=1470&q=80"
        ),
        "prepTime": 15,
        "calories": 350,
        "carbs": 45,
        "fat": 12,
        "tags": ["high-protein", "lunch", "quick"],
        "keyBenefits": ["Fiber-rich", "Heart-healthy", "Sustained energy"],
        "ingredients": [
            "2 cups chickpeas, cooked",
            "1 cucumber, diced",
            "1 bell pepper, diced",
            "1/4 cup red onion, finely chopped",
            "1/4 cup kalamata olives, sliced",
            "1/4 cup feta cheese (optional, omit for vegan)",
            "2 tbsp olive oil",
            "1 tbsp lemon juice",
            "1 tsp dried oregano",
            "Salt and pepper to taste",
        ],
        "instructions": [
            "Combine chickpeas, cucumber, bell pepper, red onion, and olives in a bowl",
            "If using, add crumbled feta cheese",
            "In a small bowl, whisk together olive oil, lemon juice, and oregano",
            "Pour dressing over the salad and toss to combine",
            "Season with salt and pepper",
            "Refrigerate for 30 minutes before serving for best flavor",
        ],
        "mealType": "lunch",
        "dietaryLabels": ["Vegetarian", "Gluten-Free", "High-Protein"],
    },
    {
        "title": "Seitan and Vegetable Stir-Fry",
        "image": (
            "https://images.unsplash.com/photo-1512058564366-18510be2db19"
            f"{_UNSPLASH_PARAMS}&w=1472&q=80"
        ),
        "prepTime": 20,
        "calories": 400,
        "carbs": 25,
        "fat": 14,
        "tags": ["high-protein", "dinner", "quick"],
        "keyBenefits": ["Complete protein", "Low-carb", "Vitamin-rich"],
        "ingredients": [
            "8oz seitan, sliced",
            "2 cups mixed vegetables (broccoli, bell peppers, carrots)",
            "2 cloves garlic, minced",
            "1 tbsp ginger, grated",
            "2 tbsp tamari or soy sauce",
            "1 tbsp sesame oil",
            "1 tbsp rice vinegar",
            "1 tsp maple syrup",
            "1 tbsp cornstarch mixed with 2 tbsp water",
            "Sesame seeds and green onions for garnish",
        ],
        "instructions": [
            "Heat sesame oil in a wok or large pan over medium-high heat",
            "Add garlic and ginger, sauté for 30 seconds",
            "Add seitan and cook until browned, about 3-4 minutes",
            "Add vegetables and stir-fry for 5-7 minutes until crisp-tender",
            "In a small bowl, mix tamari, rice vinegar, and maple syrup",
            "Pour sauce over the stir-fry",
            "Add cornstarch slurry and cook until sauce thickens",
            "Garnish with sesame seeds and green onions",
        ],
        "mealType": "dinner",
        "dietaryLabels": ["Vegan", "High-Protein"],
    },
    {
        "title": "Greek Yogurt Protein Bowl",
        "image": (
            "https://images.unsplash.com/photo-1488477181946-6428a0291777"
            f"{_UNSPLASH_PARAMS}&w=1470&q=80"
        ),
        "prepTime": 5,
        "calories": 250,
        "carbs": 20,
        "fat": 8,
        "tags": ["high-protein", "snack", "quick"],
        "keyBenefits": ["Muscle recovery", "Gut health", "Calcium-rich"],
        "ingredients": [
            "1 cup Greek yogurt",
            "1 tbsp honey or maple syrup",
            "1/4 cup mixed berries",
            "1 tbsp chia seeds",
            "1 tbsp hemp seeds",
            "1 tbsp almond butter",
            "1/4 tsp vanilla extract",
            "Pinch of cinnamon",
        ],
        "instructions": [
            "Add Greek yogurt to a bowl",
            "Drizzle with honey or maple syrup",
            "Top with mixed berries, chia seeds, and hemp seeds",
            "Add a dollop of almond butter",
            "Sprinkle with cinnamon and add vanilla extract",
            "Mix gently before eating",
        ],
        "mealType": "snack",
        "dietaryLabels": ["Vegetarian", "Gluten-Free", "High-Protein"],
    },
    {
        "title": "Protein-Packed Edamame Hummus with Veggie Sticks",
        "image": (
            "https://images.unsplash.com/photo-1505576399279-565b52d4ac71"
            f"{_UNSPLASH_PARAMS}&w=1470&q=80"
        ),
        "prepTime": 10,
        "calories": 220,
        "carbs": 18,
        "fat": 12,
        "tags": ["high-protein", "snack", "vegan"],
        "keyBenefits": ["Complete protein", "Fiber-rich", "Heart-healthy"],
        "ingredients": [
            "1 cup shelled edamame, cooked",
            "1/4 cup chickpeas, cooked",
            "2 tbsp tahini",
            "1 tbsp olive oil",
            "1 tbsp lemon juice",
            "1 clove garlic",
            "1/4 tsp cumin",
            "Salt and pepper to taste",
            "Assorted vegetable sticks (carrots, celery, bell peppers)",
        ],
        "instructions": [
            "Combine edamame, chickpeas, tahini, olive oil, lemon juice, garlic, "
            "and cumin in a food processor",
            "Blend until smooth, adding water if needed to reach desired consistency",
            "Season with salt and pepper to taste",
            "Transfer to a bowl and serve with vegetable sticks",
        ],
        "mealType": "snack",
        "dietaryLabels": ["Vegan", "Gluten-Free", "High-Protein"],
    },
    {
        "title": "Protein Energy Balls",
        "image": (
            "https://images.unsplash.com/photo-1490567674331-72de84996c6a"
            f"{_UNSPLASH_PARAMS}&w=1470&q=80"
        ),
        "prepTime": 15,
        "calories": 180,
        "carbs": 15,
        "fat": 10,
        "tags": ["high-protein", "snack", "no-bake"],
        "keyBenefits": ["Sustained energy", "Portable protein", "Nutrient-dense"],
        "ingredients": [
            "1 cup rolled oats",
            "1/2 cup plant-based protein powder",
            "1/2 cup nut butter (almond, peanut, or cashew)",
            "1/4 cup ground flaxseed",
            "3 tbsp maple syrup or honey",
            "2 tbsp mini dark chocolate chips",
            "1 tsp vanilla extract",
            "Pinch of salt",
        ],
        "instructions": [
            "Combine all ingredients in a large bowl",
            "Mix well until a dough forms",
            "If mixture is too dry, add a little water or plant milk",
            "Roll into 1-inch balls",
            "Refrigerate for at least 30 minutes before serving",
            "Store in an airtight container in the refrigerator for up to a week",
        ],
        "mealType": "snack",
        "dietaryLabels": ["Vegetarian", "High-Protein"],
    },
)
