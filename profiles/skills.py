"""
Skills are stored in one of three shapes, possibly mixed in one list:

    "Python"                                   -> SimpleSkill
    {"name": "Python", "icon": "python.svg"}   -> NamedSkill
    {"title": "Backend", "skills": ["Django"]} -> SkillCategory

`parse_skill` is the only place that inspects raw JSON. Callers branch on the
returned class, never on the raw value's type.
"""
from dataclasses import dataclass, field
from typing      import List, Optional, Union


@dataclass(frozen=True)
class SimpleSkill:
    name: str

    def to_json(self):
        return self.name


@dataclass(frozen=True)
class NamedSkill:
    name: str
    icon: Optional[str] = None

    def to_json(self):
        data = {'name': self.name}
        if self.icon:
            data['icon'] = self.icon
        return data


@dataclass(frozen=True)
class SkillCategory:
    title: str
    skills: List[str] = field(default_factory=list)

    def to_json(self):
        return {'title': self.title, 'skills': list(self.skills)}


Skill = Union[SimpleSkill, NamedSkill, SkillCategory]


def parse_skill(raw) -> Skill:
    if isinstance(raw, str):
        return SimpleSkill(raw)

    if isinstance(raw, dict):
        if 'title' in raw:
            skills = raw.get('skills') or []
            if not isinstance(raw['title'], str) or not isinstance(skills, list) \
                    or not all(isinstance(s, str) for s in skills):
                raise ValueError('A skill category needs a string title and a list of skill names.')
            return SkillCategory(raw['title'], list(skills))

        if 'name' in raw:
            icon = raw.get('icon')
            if not isinstance(raw['name'], str) or (icon is not None and not isinstance(icon, str)):
                raise ValueError('A named skill needs a string name and an optional string icon.')
            return NamedSkill(raw['name'], icon or None)

    raise ValueError(f'Unrecognised skill entry: {raw!r}')


def parse_skills(raw_list) -> List[Skill]:
    if raw_list is None:
        return []
    if not isinstance(raw_list, list):
        raise ValueError('Skills must be a list.')
    return [parse_skill(item) for item in raw_list]


def skills_to_json(skills):
    return [skill.to_json() for skill in skills]


def skills_from_text(text):
    """'Python, Django ,, SQL' -> [SimpleSkill('Python'), SimpleSkill('Django'), SimpleSkill('SQL')]"""
    return [SimpleSkill(part.strip()) for part in text.split(',') if part.strip()]

