import logging

from studydeck.repositories.deck_repository import DeckRepository
from studydeck.services.backup_service import import_decks

logger = logging.getLogger(__name__)

# Колоды, которые видит новый пользователь при первом запуске
SAMPLE_DECKS = [
    {
        "id": "1",
        "name": "Biology Basics",
        "subject": "Biology",
        "description": "Fundamental concepts in biology",
        "color": "bg-green-500",
        "createdAt": "2024-11-01T00:00:00Z",
        "lastStudied": "2024-11-16T00:00:00Z",
        "totalStudyTime": 3600,
        "cards": [
            {
                "id": "1-1",
                "question": "What is photosynthesis?",
                "answer": "The process by which plants convert light energy into chemical energy "
                          "(glucose) using carbon dioxide and water, releasing oxygen as a byproduct.",
                "difficulty": "medium",
                "repetitions": 3,
                "correctCount": 5,
                "incorrectCount": 1,
                "lastReviewed": "2024-11-16T00:00:00Z",
                "nextReview": "2024-11-19T00:00:00Z",
            },
            {
                "id": "1-2",
                "question": "What are the main components of a cell?",
                "answer": "The main components include the cell membrane, cytoplasm, nucleus "
                          "(in eukaryotes), mitochondria, ribosomes, and various organelles "
                          "depending on cell type.",
                "difficulty": "easy",
                "repetitions": 5,
                "correctCount": 8,
                "incorrectCount": 0,
                "lastReviewed": "2024-11-15T00:00:00Z",
                "nextReview": "2024-11-22T00:00:00Z",
            },
            {
                "id": "1-3",
                "question": "What is DNA?",
                "answer": "Deoxyribonucleic acid - a molecule that carries genetic instructions "
                          "for the development, functioning, growth and reproduction of all "
                          "known organisms.",
                "difficulty": "medium",
                "repetitions": 2,
                "correctCount": 3,
                "incorrectCount": 2,
                "lastReviewed": "2024-11-14T00:00:00Z",
                "nextReview": "2024-11-18T00:00:00Z",
            },
        ],
    },
    {
        "id": "2",
        "name": "Spanish Vocabulary",
        "subject": "Languages",
        "description": "Common Spanish words and phrases",
        "color": "bg-orange-500",
        "createdAt": "2024-10-20T00:00:00Z",
        "lastStudied": "2024-11-17T00:00:00Z",
        "totalStudyTime": 2400,
        "cards": [
            {
                "id": "2-1",
                "question": "Hello (Spanish)",
                "answer": "Hola",
                "difficulty": "easy",
                "repetitions": 10,
                "correctCount": 15,
                "incorrectCount": 0,
                "lastReviewed": "2024-11-17T00:00:00Z",
                "nextReview": "2024-11-24T00:00:00Z",
            },
            {
                "id": "2-2",
                "question": "Thank you (Spanish)",
                "answer": "Gracias",
                "difficulty": "easy",
                "repetitions": 8,
                "correctCount": 12,
                "incorrectCount": 1,
                "lastReviewed": "2024-11-17T00:00:00Z",
                "nextReview": "2024-11-23T00:00:00Z",
            },
        ],
    },
    {
        "id": "3",
        "name": "World History - WW2",
        "subject": "History",
        "description": "AI-generated from lecture notes",
        "color": "bg-purple-500",
        "createdAt": "2024-11-10T00:00:00Z",
        "totalStudyTime": 1800,
        "isAIGenerated": True,
        "cards": [
            {
                "id": "3-1",
                "question": "When did World War 2 begin?",
                "answer": "September 1, 1939, when Germany invaded Poland.",
                "difficulty": "easy",
                "repetitions": 2,
                "correctCount": 3,
                "incorrectCount": 0,
                "lastReviewed": "2024-11-12T00:00:00Z",
                "nextReview": "2024-11-19T00:00:00Z",
            },
            {
                "id": "3-2",
                "question": "What were the main Allied powers?",
                "answer": "United States, United Kingdom, Soviet Union, and China were the "
                          "major Allied powers.",
                "difficulty": "medium",
                "repetitions": 1,
                "correctCount": 1,
                "incorrectCount": 1,
                "lastReviewed": "2024-11-13T00:00:00Z",
                "nextReview": "2024-11-18T00:00:00Z",
            },
        ],
    },
]


def seed_sample_decks(repository: DeckRepository) -> bool:
    if not repository.is_empty():
        return False

    import_decks(repository, SAMPLE_DECKS)
    logger.info("Seeded %d sample decks", len(SAMPLE_DECKS))
    return True
