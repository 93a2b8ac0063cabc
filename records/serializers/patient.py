from django.conf import settings
from rest_framework import serializers

from records.models import Patient


class PatientSerializer(serializers.ModelSerializer):
    """Input validation and JSON representation for patients."""
    name = serializers.CharField(max_length=100, trim_whitespace=True, error_messages={
        'blank': 'Name must not be empty.',
        'required': 'Name must not be empty.',
    })
    birth_date = serializers.DateField(input_formats=['%Y-%m-%d', 'iso-8601'], error_messages={
        'invalid': 'Date must use the YYYY-MM-DD format.',
        'required': 'Birth date is required.',
        'null': 'Birth date is required.',
    })
    is_sick = serializers.BooleanField(required=False, default=False)
    score = serializers.IntegerField(error_messages={
        'invalid': 'Score must be a whole number.',
        'required': 'Score is required.',
    })

    class Meta:
        model = Patient
        fields = ['id', 'name', 'birth_date', 'is_sick', 'score']
        read_only_fields = ['id']

    def validate_name(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Name must not be empty.')
        return v

    def validate_score(self, v):
        low, high = settings.PATIENT_SCORE_MIN, settings.PATIENT_SCORE_MAX
        if v < low or v > high:
            raise serializers.ValidationError(f'Score must be between {low} and {high}.')
        return v
