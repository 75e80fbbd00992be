import copy

from rest_framework import serializers

from profiles.content import ContentSectionsSerializer
from .models     import Portfolio
from .resolution import resolve_content, lookup_owned_profile
from .templates  import TemplateId, template_for


class PortfolioSerializer(serializers.ModelSerializer):
    """
    Owner view of a portfolio. `content` is always the resolved payload;
    pass `profile_lookup` in the context to batch profile queries.
    """
    userId        = serializers.IntegerField(source='user_id', read_only=True)
    templateId    = serializers.CharField(source='template_id', read_only=True)
    profileId     = serializers.IntegerField(source='profile_id', read_only=True)
    isPublished   = serializers.BooleanField(source='is_published', read_only=True)
    hasBeenEdited = serializers.BooleanField(source='has_been_edited', read_only=True)
    createdAt     = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt     = serializers.DateTimeField(source='updated_at', read_only=True)
    content       = serializers.SerializerMethodField()

    class Meta:
        model  = Portfolio
        fields = (
            'id', 'userId', 'templateId', 'profileId', 'slug',
            'title', 'description', 'isPublished', 'hasBeenEdited',
            'content', 'createdAt', 'updatedAt',
        )
        read_only_fields = fields

    def get_content(self, obj):
        lookup = self.context.get('profile_lookup', lookup_owned_profile)
        return resolve_content(obj, lookup)


class PublicPortfolioSerializer(serializers.ModelSerializer):
    """What an anonymous visitor of /p/<slug> receives."""
    templateId = serializers.SerializerMethodField()
    content    = serializers.SerializerMethodField()

    class Meta:
        model  = Portfolio
        fields = ('id', 'slug', 'title', 'description', 'templateId', 'content')
        read_only_fields = fields

    def get_templateId(self, obj):
        return template_for(obj.template_id).value

    def get_content(self, obj):
        return resolve_content(obj)


class CreatePortfolioSerializer(serializers.Serializer):
    templateId  = serializers.ChoiceField(choices=TemplateId.choices)
    profileId   = serializers.IntegerField()
    title       = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)

    def create(self, validated_data):
        # The view has already checked that the profile belongs to the caller
        profile = self.context['profile']
        return Portfolio.objects.create(
            user=self.context['request'].user,
            template_id=validated_data['templateId'],
            profile_id=profile.pk,
            title=validated_data.get('title') or 'My Portfolio',
            description=validated_data.get('description') or '',
            content=copy.deepcopy(profile.content),
        )


class UpdatePortfolioSerializer(ContentSectionsSerializer):
    """
    Whitelisted partial update. `slug`, `userId` and `id` are not fields
    here, so they are silently ignored if sent.
    """
    title         = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description   = serializers.CharField(required=False, allow_blank=True)
    isPublished   = serializers.BooleanField(source='is_published', required=False)
    hasBeenEdited = serializers.BooleanField(source='has_been_edited', required=False)
    templateId    = serializers.ChoiceField(source='template_id', choices=TemplateId.choices, required=False)
    profileId     = serializers.IntegerField(source='profile_id', required=False, allow_null=True)

    SIMPLE_FIELDS = ('title', 'description', 'is_published', 'has_been_edited', 'template_id', 'profile_id')

    def update(self, instance, validated_data):
        linking = validated_data.get('profile_id') is not None
        if linking and 'content' not in validated_data:
            # One-time copy of the newly linked profile's content (not atomic
            # with respect to concurrent edits of that profile)
            instance.content = copy.deepcopy(self.context['linked_profile'].content)

        content = self.build_content(instance.content, validated_data)
        if content is not None:
            instance.content = content

        for field in self.SIMPLE_FIELDS:
            if field in validated_data:
                setattr(instance, field, validated_data[field])
        instance.save()
        return instance
