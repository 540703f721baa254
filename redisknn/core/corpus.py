"""Sample sentences loaded by the demo, grouped by category."""

from typing import List, Tuple

DEFAULT_QUERY = "Wearable technology, like smartwatches, is making it easier for people"

SAMPLE_CORPUS: List[Tuple[str, List[str]]] = [
    ("Technology and Innovation", [
        "Artificial intelligence is transforming industries by automating tasks and enhancing decision-making.",
        "The rise of virtual reality has opened new possibilities for remote learning and immersive gaming.",
        "Self-driving cars are poised to revolutionize the way we commute, reducing accidents and traffic congestion.",
        "Wearable technology, like smartwatches, is making it easier for people to monitor their health metrics in real time.",
        "Advances in renewable energy technologies are crucial for combating climate change and reducing global reliance on fossil fuels.",
    ]),
    ("Travel and Exploration", [
        "Backpacking across Europe offers an intimate glimpse into the rich history and diverse cultures of the continent.",
        "The popularity of eco-tourism is helping to preserve natural habitats while providing travelers with unique experiences.",
        "Exploring the coral reefs of Australia is a breathtaking adventure that highlights the beauty of marine biodiversity.",
        "Historical landmarks, from the Great Wall of China to the pyramids of Egypt, tell stories of ancient civilizations.",
        "Culinary tours in cities like Paris and Tokyo allow travelers to explore the local flavors and culinary traditions.",
    ]),
    ("Health and Wellness", [
        "Regular exercise is key to maintaining physical health and improving overall well-being.",
        "Mental health is gaining recognition as a critical aspect of overall health, with mindfulness and meditation becoming more popular.",
        "The benefits of a balanced diet are well-documented, including improved energy levels and better immune system function.",
        "Sleep hygiene plays a crucial role in physical and mental health, impacting mood, cognition, and performance.",
        "The rise of telemedicine is making healthcare more accessible, allowing patients to consult with doctors remotely.",
    ]),
    ("Education and Learning", [
        "Online education platforms are expanding access to learning opportunities for people around the world.",
        "The integration of technology in classrooms is enhancing interactive learning and engagement among students.",
        "Lifelong learning is essential for career development and staying current with evolving industry trends.",
        "Critical thinking and problem-solving are fundamental skills that education systems aim to instill in students.",
        "Bilingual education has numerous cognitive benefits, including better memory and enhanced problem-solving skills.",
    ]),
]
