"""
The editable content document shared by profiles and portfolio snapshots.

Keys are camelCase because the document is handed to template renderers
and browser clients as-is.
"""
import copy

from rest_framework import serializers

from users.serializers import image_value

from .skills import parse_skills, skills_to_json, skills_from_text

CONTENT_SECTIONS = ('personalInfo', 'projects', 'skills', 'experience', 'certificates')


# ─── Section serializers ──────────────────────────────────────────────────────

def _text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, **kwargs)


class SocialLinkSerializer(serializers.Serializer):
    platform = _text()
    link     = _text()


class ProjectSerializer(serializers.Serializer):
    title       = _text()
    description = _text()
    link        = _text(allow_null=True)
    githubLink  = _text(allow_null=True)
    image       = _text(allow_null=True)


class ExperienceSerializer(serializers.Serializer):
    company     = _text()
    position    = _text()
    startDate   = _text()
    endDate     = _text(allow_null=True)
    description = _text(allow_null=True)
    location    = _text(allow_null=True)
    current     = serializers.BooleanField(required=False)


class CertificateSerializer(serializers.Serializer):
    name           = _text()
    provider       = _text()
    issuedOn       = _text()
    certificateId  = _text(allow_null=True)
    certificateUrl = _text(allow_null=True)


class PersonalInfoSerializer(serializers.Serializer):
    name         = _text()
    title        = _text()
    bio          = _text()
    email        = _text()
    phoneNo      = _text()
    profilePhoto = _text(allow_null=True)
    socials      = SocialLinkSerializer(many=True, required=False)


class SkillListField(serializers.Field):
    """
    Accepts a list of skill entries (see profiles.skills) or a
    comma-separated string; stores the canonical JSON of each entry.
    """
    default_error_messages = {
        'invalid': '{message}',
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            return skills_to_json(skills_from_text(data))
        try:
            return skills_to_json(parse_skills(data))
        except ValueError as e:
            self.fail('invalid', message=str(e))

    def to_representation(self, value):
        return value


class ContentSerializer(serializers.Serializer):
    personalInfo = PersonalInfoSerializer(required=False)
    projects     = ProjectSerializer(many=True, required=False)
    skills       = SkillListField(required=False)
    experience   = ExperienceSerializer(many=True, required=False)
    certificates = CertificateSerializer(many=True, required=False)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def plain_json(value):
    """Nested serializer output (OrderedDicts) -> plain dicts/lists."""
    if isinstance(value, dict):
        return {k: plain_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [plain_json(v) for v in value]
    return value


def merge_sections(content, sections):
    """
    Return a copy of `content` with `sections` merged in.
    personalInfo is merged key by key; list sections are replaced whole.
    """
    merged = copy.deepcopy(content or {})
    for key, value in sections.items():
        if key == 'personalInfo' and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **copy.deepcopy(value)}
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def default_content_for(user):
    """Starter content for a new profile, seeded from the account."""
    return {
        'personalInfo': {
            'name':         user.name or 'My Name',
            'title':        'Professional Title',
            'bio':          'A short bio about myself.',
            'email':        user.email,
            'phoneNo':      '',
            'profilePhoto': image_value(user),
            'socials':      [],
        },
        'projects':     [],
        'skills':       [],
        'experience':   [],
        'certificates': [],
    }


def normalize_content(content):
    """Fill in the keys an editor expects so nested edits never hit a missing key."""
    data = copy.deepcopy(content or {})
    info = data.get('personalInfo') or {}
    # stored nulls must not survive: PersonalInfoSerializer rejects them on save
    data['personalInfo'] = {
        **info,
        'name':         info.get('name') or '',
        'title':        info.get('title') or '',
        'bio':          info.get('bio') or '',
        'email':        info.get('email') or '',
        'phoneNo':      info.get('phoneNo') or '',
        'profilePhoto': info.get('profilePhoto') or '',
        'socials':      info.get('socials') or [],
    }
    for key in ('projects', 'skills', 'experience', 'certificates'):
        data[key] = data.get(key) or []
    return data


class ContentSectionsSerializer(serializers.Serializer):
    """
    Base for whitelisted update serializers: accepts a full `content` and/or
    individual top-level section keys, and folds them into one document.
    """
    content      = ContentSerializer(required=False)
    personalInfo = PersonalInfoSerializer(required=False)
    projects     = ProjectSerializer(many=True, required=False)
    skills       = SkillListField(required=False)
    experience   = ExperienceSerializer(many=True, required=False)
    certificates = CertificateSerializer(many=True, required=False)

    def build_content(self, current, validated_data):
        """
        Returns the new content document, or None when the request touched
        neither `content` nor any section.
        """
        sections = {k: plain_json(validated_data.pop(k)) for k in CONTENT_SECTIONS if k in validated_data}
        if 'content' in validated_data:
            base = plain_json(validated_data.pop('content'))
        elif sections:
            base = current
        else:
            return None
        return merge_sections(base, sections)
