"""Coaching topics and the skill areas under each."""

TOPIC_SKILLS: dict[str, list[str]] = {
    "Leadership": [
        "Transformational Leadership",
        "Authenticity",
        "Emotional Intelligence",
        "DEI",
        "Problem Solving",
        "Next Level Leadership",
    ],
    "Resilience": [
        "Growth Mindset",
        "Time Management",
        "Impostor Syndrome",
        "Goal Setting",
        "Time Blocking",
        "Learning Agility",
    ],
    "Collaboration": [
        "Active Listening",
        "Messaging",
        "Empathy & Understanding",
        "Building Trust",
        "Team Dynamics",
        "Conflict Resolution",
    ],
    "Communication": [
        "Storytelling & Messaging",
        "Presentation Skills",
        "Negotiation",
        "Social Media",
        "Personal Branding",
        "Mastering Feedback",
    ],
    "Personal Well Being": [
        "Physical Health",
        "Mental Health",
        "Emotional Health",
        "Financial Health",
        "Work/Life Balance",
        "Stress Management",
    ],
    "Critical Thinking": [
        "Data-driven Decision Making",
        "Ethics",
        "Visioning",
        "Planning & Strategy",
        "Strategy & Planning",
    ],
    "Career Development": [
        "Personal Branding",
        "Resume Building",
        "Career Transitioning",
        "Interview Skills",
        "Presentation Skills",
    ],
    "Global Fluency": [
        "World Views",
        "Global Communication Skills",
        "Understanding Global Markets & Trends",
        "Cultural Awareness & Sensitivity",
        "Intercultural Competency",
        "Adaptability & Agility",
    ],
    "Creativity": [
        "Innovation & Experimentation",
        "Empowerment & Autonomy",
        "Cross-Disciplinary Collaboration",
    ],
    "Technology": [
        "Data-driven Decision Making",
        "Cyber Security & Risk Management",
        "Innovation & Change Management",
        "AI",
        "Vision & Strategy Alignment",
        "Ethics & Sustainability",
    ],
}

TOPICS: list[str] = list(TOPIC_SKILLS)


def get_skills(topic: str) -> list[str]:
    """Skill areas for a topic (empty for unknown topics)."""
    return list(TOPIC_SKILLS.get(topic, []))


def all_skills() -> list[str]:
    """Every skill area once, in catalog order."""
    seen: list[str] = []
    for skills in TOPIC_SKILLS.values():
        for skill in skills:
            if skill not in seen:
                seen.append(skill)
    return seen
