import enum

from collections import namedtuple

from .de import (
    dict_keys_to_list, dict_values_to_list, read_bool, read_enum, read_id,
    read_int, read_opt_str, read_str, read_str_list, read_value
)
from .errors import ParseError


#---------------------------------------------------------------------------#
#   Enums                                                                   #
#---------------------------------------------------------------------------#


class IllustType(enum.IntEnum):
    ILLUST = 0
    MANGA = 1
    UGOIRA = 2


class Restriction(enum.IntEnum):
    GENERAL = 0
    R18 = 1
    R18G = 2


#---------------------------------------------------------------------------#
#   Entities                                                                #
#       Immutable, built from the camelCase wire dicts by "make_*".         #
#       Date/time fields, novels and thumbnail URLs are not modelled yet.   #
#---------------------------------------------------------------------------#


_user_profile_fields = [
    "user_id",          #   int *from str
    "name",
    "image",            #   profile image URL
    "image_big",
    "premium",          #   bool, pixiv Premium subscriber
    "is_followed",
    "is_mypixiv",
    "is_blocking",
    "comment",
    "followed_back",
    "accept_request"    #   bool, accepts commission requests
]
UserProfile = namedtuple("UserProfile", _user_profile_fields)

_user_info_fields = [
    "profile",          #   UserProfile, flattened on the wire
    "following",        #   int
    "comment_html",
    "webpage",          #   str or None
    "official"
]
UserInfo = namedtuple("UserInfo", _user_info_fields)

_illust_info_fields = [
    "id",               #   int *from str
    "title",
    "description",      #   HTML
    "illust_type",      #   IllustType
    "restriction",      #   Restriction
    "user_id",
    "user_name",
    "width",            #   of the first page
    "height"
]
IllustInfo = namedtuple("IllustInfo", _illust_info_fields)

_illust_profile_fields = _illust_info_fields[:5] + [
    "url",              #   first page, master size
    "tags",             #   list of str, untranslated
    "user_id",
    "user_name",
    "width",
    "height",
    "page_count",
    "profile_image_url"
]
IllustProfile = namedtuple("IllustProfile", _illust_profile_fields)

UserTopWorks = namedtuple("UserTopWorks", ["illusts", "mangas"])
UserAllWorks = namedtuple("UserAllWorks", ["illusts", "mangas"])

IllustImageUrls = namedtuple(
    "IllustImageUrls", ["small", "regular", "original"]
)
IllustImage = namedtuple("IllustImage", ["width", "height", "urls"])


#---------------------------------------------------------------------------#
#   Builders                                                                #
#---------------------------------------------------------------------------#


def make_user_profile(content):
    return UserProfile(
        read_id(content, "userId"),
        read_str(content, "name"),
        read_str(content, "image"),
        read_str(content, "imageBig"),
        read_bool(content, "premium"),
        read_bool(content, "isFollowed"),
        read_bool(content, "isMypixiv"),
        read_bool(content, "isBlocking"),
        read_str(content, "comment"),
        read_bool(content, "followedBack"),
        read_bool(content, "acceptRequest")
    )

def make_user_info(content):
    return UserInfo(
        make_user_profile(content),
        read_int(content, "following"),
        read_str(content, "commentHtml"),
        read_opt_str(content, "webpage"),
        read_bool(content, "official")
    )

def make_illust_info(content):
    return IllustInfo(
        read_id(content, "id"),
        read_str(content, "title"),
        read_str(content, "description"),
        read_enum(content, "illustType", IllustType),
        read_enum(content, "xRestrict", Restriction),
        read_id(content, "userId"),
        read_str(content, "userName"),
        read_int(content, "width"),
        read_int(content, "height")
    )

def make_illust_profile(content):
    return IllustProfile(
        read_id(content, "id"),
        read_str(content, "title"),
        read_str(content, "description"),
        read_enum(content, "illustType", IllustType),
        read_enum(content, "xRestrict", Restriction),
        read_str(content, "url"),
        read_str_list(content, "tags"),
        read_id(content, "userId"),
        read_str(content, "userName"),
        read_int(content, "width"),
        read_int(content, "height"),
        read_int(content, "pageCount"),
        read_str(content, "profileImageUrl")
    )

def make_user_top_works(content):
    #   Placeholder entries (null) are dropped, not fatal.
    illusts = read_value(content, "illusts")
    mangas = read_value(content, "manga")
    return UserTopWorks(
        dict_values_to_list(illusts, make_illust_profile),
        dict_values_to_list(mangas, make_illust_profile)
    )

def make_user_all_works(content):
    return UserAllWorks(
        dict_keys_to_list(read_value(content, "illusts")),
        dict_keys_to_list(read_value(content, "manga"))
    )

def make_illust_image_urls(content):
    return IllustImageUrls(
        read_str(content, "small"),
        read_str(content, "regular"),
        read_str(content, "original")
    )

def make_illust_image(content):
    return IllustImage(
        read_int(content, "width"),
        read_int(content, "height"),
        make_illust_image_urls(read_value(content, "urls"))
    )

def make_illust_pages(content):
    if not isinstance(content, list):
        raise ParseError(
            f"Expected a list of pages, got {type(content).__name__}"
        )
    return [make_illust_image(c) for c in content]
