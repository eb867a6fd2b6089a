"""CMS contracts — content types, entries, media, taxonomy, pages, workflow."""

from __future__ import annotations

from typing import Any, Literal

from recordkit.domain.record import (
    RECORD,
    SchemaModel,
    defaulted,
    extend,
    optional,
    required,
    stamped,
)
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import Timestamp, UrlStr, UuidStr, text, url

DOMAIN = "content"

EditorType = Literal["richText", "markdown", "code", "wysiwyg"]
WorkflowStatus = Literal["draft", "in-review", "approved", "published", "archived"]
EntryStatus = Literal["draft", "published", "archived"]
RelationType = Literal["related", "featured", "parent-child"]
EditorState = Literal["draft", "editing", "autosaving", "saved"]
TemplateLayout = Literal["singleColumn", "twoColumn", "grid", "custom"]
TemplateFieldType = Literal["text", "image", "video", "richText", "json"]
ContentFieldType = Literal[
    "text", "richText", "image", "video", "boolean", "number", "date", "json"
]

Platform = text("Social platform is required.")
LinkUrl = url("Must be a valid URL.")
TemplateFieldName = text("Field name is required.")


class Dimensions(SchemaModel):
    width: float | None = None
    height: float | None = None


class SocialLink(SchemaModel):
    platform: Platform
    url: LinkUrl


class TemplateField(SchemaModel):
    """A field rendered by a view template."""

    field_name: TemplateFieldName
    field_type: TemplateFieldType


class SeoMetadata(SchemaModel):
    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None


class FieldRules(SchemaModel):
    """Validation rules declared on a content field."""

    max_length: float | None = None
    min_length: float | None = None
    min_value: float | None = None
    max_value: float | None = None
    regex: str | None = None


class DisplayOptions(SchemaModel):
    label: str | None = None
    placeholder: str | None = None
    help_text: str | None = None


class ContentField(SchemaModel):
    """An individual field within a content type."""

    field_name: TemplateFieldName
    field_type: ContentFieldType
    required: bool = False
    default_value: Any = None
    validation_rules: FieldRules | None = None
    display_options: DisplayOptions | None = None


MEDIA_ASSET = extend(
    RECORD,
    "MediaAsset",
    {
        "file_name": required(text("File name is required."), "Such as 'hero.jpg'."),
        "file_type": required(text("File type is required."), "Such as 'image/jpeg'."),
        "url": required(LinkUrl, "Where the media asset is hosted."),
        "description": optional(str, "A description of the media asset."),
        "alt_text": optional(str, "Alternative text for accessibility or SEO."),
        "size_in_bytes": optional(float, "The size of the media asset in bytes."),
        "dimensions": optional(Dimensions, "Width and height, if applicable."),
    },
    doc="An image, video or document file.",
)

TAXONOMY = extend(
    RECORD,
    "Taxonomy",
    {
        "name": required(text("Taxonomy name is required."), "Such as 'Categories' or 'Tags'."),
        "description": optional(str, "The purpose of the taxonomy."),
        "is_hierarchical": defaulted(bool, False, "Hierarchical (categories) or flat (tags)."),
    },
    doc="A classification system such as categories or tags.",
)

CATEGORY = extend(
    RECORD,
    "Category",
    {
        "taxonomy_id": required(UuidStr, "The UUID of the taxonomy this category belongs to."),
        "name": required(text("Category name is required."), "The name of the category."),
        "parent_category_id": optional(UuidStr, "The UUID of the parent category."),
        "description": optional(str, "A description of the category."),
    },
    doc="A node in a hierarchical taxonomy.",
)

TAG = extend(
    RECORD,
    "Tag",
    {
        "taxonomy_id": required(UuidStr, "The UUID of the taxonomy this tag belongs to."),
        "name": required(text("Tag name is required."), "The name of the tag."),
        "description": optional(str, "A description of the tag."),
    },
    doc="A non-hierarchical label used to classify content.",
)

AUTHOR = extend(
    RECORD,
    "Author",
    {
        "name": required(text("Author name is required."), "The name of the author."),
        "bio": optional(str, "A short biography."),
        "profile_picture_url": optional(UrlStr, "The URL of the author's profile picture."),
        "social_links": optional(list[SocialLink], "Social media links for the author."),
    },
    doc="The creator of content.",
)

CONTENT_VERSION = extend(
    RECORD,
    "ContentVersion",
    {
        "content_entry_id": required(UuidStr, "The UUID of the versioned content entry."),
        "version_number": required(
            text("Version number is required."), "Such as 'v1.0' or 'v2.1'."
        ),
        "changes": optional(str, "The changes made in this version."),
        "is_current_version": defaulted(bool, False, "Whether this is the current version."),
    },
    doc="A version of a content entry.",
)

CONTENT_WORKFLOW = extend(
    RECORD,
    "ContentWorkflow",
    {
        "content_entry_id": required(UuidStr, "The UUID of the content entry."),
        "status": required(WorkflowStatus, "The current workflow status."),
        "assigned_to": optional(UuidStr, "The user or team assigned to review the content."),
        "due_date": optional(Timestamp, "Due date for review or approval."),
        "comments": optional(list[str], "Comments from reviewers or approvers."),
    },
    doc="The review and approval workflow of a content entry.",
)

CONTENT_RELATION = extend(
    RECORD,
    "ContentRelation",
    {
        "from_content_id": required(UuidStr, "The UUID of the source content entry."),
        "to_content_id": required(UuidStr, "The UUID of the related content entry."),
        "relation_type": required(RelationType, "The type of relationship."),
    },
    doc="A relationship between two content entries.",
)

COMMENT = extend(
    RECORD,
    "Comment",
    {
        "content_entry_id": required(UuidStr, "The UUID of the commented content entry."),
        "author": required(text("Comment author is required."), "The comment's author."),
        "text": required(text("Comment text is required."), "The content of the comment."),
        "created_at": stamped("When the comment was created."),
    },
    doc="User feedback or discussion on content.",
)

CONTENT_LOCALIZATION = extend(
    RECORD,
    "ContentLocalization",
    {
        "content_entry_id": required(UuidStr, "The UUID of the localized content entry."),
        "language_code": required(
            text(min_length=2, max_length=5), "Language code such as 'en' or 'pt-BR'."
        ),
        "localized_fields": required(dict[str, Any], "Field names and their localized values."),
        "is_primary_language": defaulted(bool, False, "Whether this is the primary language."),
    },
    doc="A localized version of a content entry.",
)

EDITOR = extend(
    RECORD,
    "Editor",
    {
        "editor_type": required(EditorType, "The kind of editor."),
        "settings": optional(dict[str, Any], "Editor configuration (toolbar, highlighting)."),
        "autosave_interval": optional(float, "Autosave interval in seconds."),
    },
    doc="The editor used to create and edit content.",
)

VIEW_TEMPLATE = extend(
    RECORD,
    "ViewTemplate",
    {
        "name": required(text("Template name is required."), "Such as 'Blog Template'."),
        "description": optional(str, "The intended use of the template."),
        "layout": required(TemplateLayout, "The layout type."),
        "fields": optional(list[TemplateField], "Fields displayed by the template."),
    },
    doc="A layout used to display content.",
)

PAGE = extend(
    RECORD,
    "Page",
    {
        "title": required(text("Page title is required."), "The main heading of the page."),
        "slug": required(text("Page slug is required."), "Such as '/about'."),
        "template_id": required(UuidStr, "The UUID of the view template used."),
        "content_entries": optional(list[UuidStr], "Content entry UUIDs shown on the page."),
        "seo_metadata": optional(SeoMetadata, "SEO title, description and keywords."),
        "is_published": defaulted(bool, False, "Whether the page is visible to the public."),
        "publish_date": optional(Timestamp, "When the page was published."),
    },
    doc="A page on which content entries are displayed.",
)

CONTENT_EDITOR_STATE = extend(
    RECORD,
    "ContentEditorState",
    {
        "content_entry_id": required(UuidStr, "The UUID of the content entry being edited."),
        "editor_state": required(EditorState, "The current state of the editor."),
        "last_edited_at": stamped("When the content was last edited."),
        "editor_type": required(EditorType, "The editor in use."),
    },
    doc="The state of content while it is being edited.",
)

CONTENT_PREVIEW = extend(
    RECORD,
    "ContentPreview",
    {
        "content_entry_id": required(UuidStr, "The UUID of the content entry being previewed."),
        "template_id": optional(UuidStr, "The UUID of the view template used for the preview."),
        "preview_url": required(UrlStr, "Where the content can be previewed."),
        "preview_generated_at": stamped("When the preview was generated."),
    },
    doc="A preview of content before it is published.",
)

CONTENT_TYPE = extend(
    RECORD,
    "ContentType",
    {
        "name": required(
            text("Content type name is required."), "Such as 'Blog Post' or 'Product'."
        ),
        "description": optional(str, "The purpose of the content type."),
        "fields": required(list[ContentField], "Fields defining the content structure."),
    },
    doc="A blueprint for a kind of content.",
)

CONTENT_ENTRY = extend(
    RECORD,
    "ContentEntry",
    {
        "content_type_id": required(UuidStr, "The UUID of the content type of this entry."),
        "fields": required(dict[str, Any], "Field values, keyed by field name."),
        "status": defaulted(EntryStatus, "draft", "The publication status."),
        "published_at": optional(Timestamp, "When the entry was published."),
    },
    doc="An individual piece of content within a content type.",
)

CONTRACTS = (
    MEDIA_ASSET,
    TAXONOMY,
    CATEGORY,
    TAG,
    AUTHOR,
    CONTENT_VERSION,
    CONTENT_WORKFLOW,
    CONTENT_RELATION,
    COMMENT,
    CONTENT_LOCALIZATION,
    EDITOR,
    VIEW_TEMPLATE,
    PAGE,
    CONTENT_EDITOR_STATE,
    CONTENT_PREVIEW,
    CONTENT_TYPE,
    CONTENT_ENTRY,
)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
