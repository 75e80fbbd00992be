from rest_framework import serializers

from .content import ContentSerializer, ContentSectionsSerializer, default_content_for, plain_json
from .models  import Profile


class ProfileSerializer(serializers.ModelSerializer):
    """Used for listing / reading profiles."""
    userId    = serializers.IntegerField(source='user_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model  = Profile
        fields = ('id', 'userId', 'name', 'description', 'content', 'createdAt', 'updatedAt')
        read_only_fields = fields


class CreateProfileSerializer(serializers.Serializer):
    name        = serializers.CharField(max_length=120)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    content     = ContentSerializer(required=False)

    def create(self, validated_data):
        user = self.context['request'].user
        if 'content' in validated_data:
            content = plain_json(validated_data['content'])
        else:
            content = default_content_for(user)
        return Profile.objects.create(
            user=user,
            name=validated_data['name'],
            description=validated_data.get('description') or '',
            content=content,
        )


class UpdateProfileSerializer(ContentSectionsSerializer):
    """
    Whitelisted partial update: name, description, content and the
    individual content sections. Anything else in the payload is ignored.
    """
    name        = serializers.CharField(max_length=120, required=False)
    description = serializers.CharField(required=False, allow_blank=True)

    def update(self, instance, validated_data):
        content = self.build_content(instance.content, validated_data)
        if content is not None:
            instance.content = content
        for field in ('name', 'description'):
            if field in validated_data:
                setattr(instance, field, validated_data[field])
        instance.save()
        return instance
