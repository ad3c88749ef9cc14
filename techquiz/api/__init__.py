"""TechQuiz REST API."""
