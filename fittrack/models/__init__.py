# Import all models here
from fittrack.models.user_profile import UserProfile
from fittrack.models.meal_plan import MealPlan, Meal, ShoppingList
from fittrack.models.tracking import NutritionLog
