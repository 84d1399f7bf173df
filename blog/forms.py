from django import forms

from blog.constants import MAX_SEARCH_QUERY_LENGTH


class PostSearchForm(forms.Form):
    q = forms.CharField(
        required=False,
        label='Search posts',
        widget=forms.TextInput(attrs={'placeholder': 'Search posts...', 'maxlength': MAX_SEARCH_QUERY_LENGTH}),
    )

    def clean_q(self):
        # Over-long queries are truncated rather than rejected.
        return (self.cleaned_data.get('q') or '').strip()[:MAX_SEARCH_QUERY_LENGTH]
