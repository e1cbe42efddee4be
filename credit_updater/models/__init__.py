from credit_updater.models.characters import (
    Appearance,
    Character,
    CreditType,
    Individual,
    StoryCredit,
    Team,
)
from credit_updater.models.gcd import (
    GcdPublisher,
    GcdSeries,
    GcdIssue,
    GcdStory,
    MigrateStory,
    GcdCreatorNameDetail,
    GcdStoryCredit,
)
from credit_updater.models.migration import (
    MCharacter,
    MCharacterAppearance,
    MStoryCredit,
)
